#!/usr/bin/env python3
"""
Run the time clock API with uvicorn
"""
import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "timeclock.fastapi.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
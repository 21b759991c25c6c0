#!/usr/bin/env python3
"""
Run a migration from migrations/ with the project root on PYTHONPATH.

Usage: python run_migration.py <migration_name> [--rollback]
       python run_migration.py --list
"""

import os
import sys
import subprocess

PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
MIGRATIONS_DIR = os.path.join(PROJECT_ROOT, 'migrations')


def available_migrations():
    """Names of migration scripts, without the .py suffix."""
    return sorted(
        name[:-3] for name in os.listdir(MIGRATIONS_DIR)
        if name.endswith('.py') and not name.startswith('_')
    )


def run_migration(migration_name, extra_args=()):
    """Run one migration in a subprocess; returns True on success."""
    migration_path = os.path.join(MIGRATIONS_DIR, f'{migration_name}.py')
    if not os.path.exists(migration_path):
        print(f"❌ Migration not found: {migration_name}")
        print(f"Available: {', '.join(available_migrations()) or '(none)'}")
        return False

    env = os.environ.copy()
    env['PYTHONPATH'] = PROJECT_ROOT

    print(f"🚀 Running migration: {migration_name} {' '.join(extra_args)}".rstrip())
    result = subprocess.run(
        [sys.executable, migration_path, *extra_args],
        env=env,
        cwd=PROJECT_ROOT
    )
    return result.returncode == 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(__doc__.strip())
        sys.exit(1)

    if sys.argv[1] == '--list':
        for name in available_migrations():
            print(name)
        sys.exit(0)

    sys.exit(0 if run_migration(sys.argv[1], sys.argv[2:]) else 1)

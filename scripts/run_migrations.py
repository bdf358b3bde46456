#!/usr/bin/env python3
"""Apply database migrations with Logfire error tracking.

Usage:
    python scripts/run_migrations.py                    # upgrade to head
    python scripts/run_migrations.py upgrade <rev>      # upgrade to a revision
    python scripts/run_migrations.py downgrade [<rev>]  # default: one step back
"""

import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config

from crushboard.config import Settings
from crushboard.util.observability import configure_logfire

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def build_alembic_config() -> Config:
    """Alembic config pointing at the project's migrations directory."""
    alembic_cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    return alembic_cfg


def main(argv: list[str]) -> int:
    """Migrate the schema in the requested direction."""
    settings = Settings()
    configure_logfire(settings)

    direction = argv[1] if len(argv) > 1 else "upgrade"
    if direction not in ("upgrade", "downgrade"):
        raise SystemExit(f"Unknown direction: {direction}")
    default_target = "head" if direction == "upgrade" else "-1"
    target = argv[2] if len(argv) > 2 else default_target

    alembic_cfg = build_alembic_config()

    with logfire.span("migrations.run", direction=direction, target=target):
        try:
            if direction == "upgrade":
                command.upgrade(alembic_cfg, target)
            else:
                command.downgrade(alembic_cfg, target)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                error=str(e),
                error_type=type(e).__name__,
                target=target,
                _exc_info=sys.exc_info(),
            )
            # Re-raise so the container fails and doesn't start with broken schema
            raise

    logfire.info("Database migrations completed", target=target)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))

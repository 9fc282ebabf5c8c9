import json
import logging
from datetime import datetime, timezone

PACKAGE_LOGGER = "academy_client"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach one stderr handler to the package logger; repeated calls only adjust the level."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level.upper())
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
    return package_logger


def action_record(
    module: str,
    action: str,
    actor_role: str | None,
    branch_id: str | None,
    outcome: str,
) -> dict:
    return {
        "ts": datetime.now(timezone.utc).isoformat(),
        "module": module,
        "action": action,
        "actor_role": actor_role,
        "branch_id": branch_id,
        "outcome": outcome,
    }


def log_action(logger: logging.Logger, outcome: str, **fields) -> None:
    """One JSON line per user action; failures and denials log above INFO."""
    record = action_record(outcome=outcome, **fields)
    level = {"error": logging.ERROR, "denied": logging.WARNING}.get(outcome, logging.INFO)
    logger.log(level, json.dumps(record, sort_keys=True))

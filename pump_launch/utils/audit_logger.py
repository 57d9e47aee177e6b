# pump_launch/utils/audit_logger.py

import json
from datetime import datetime, timezone
from typing import Optional

from .logger import get_logger

audit_log = get_logger("AuditLogger")  # Dedicated logger instance


class LaunchAuditLogger:
    """
    Records one JSON line per token launch outcome for later analysis.
    (Console, plus an optional append-only file)
    """

    def __init__(self, log_to_file: bool = False, filepath: str = "launch_audit.log"):
        self.log_to_file = log_to_file
        self.filepath = filepath
        audit_log.info("LaunchAuditLogger initialized.")

    def log_launch_event(
            self,
            event_type: str,  # e.g., "LAUNCH_SUCCESS", "LAUNCH_FAIL"
            context,  # LaunchContext
            buy_amount_sol: float = 0.0,
            error: Optional[BaseException] = None,
            extra_data: Optional[dict] = None,
    ) -> dict:
        """Logs a launch-related event and returns the logged entry."""
        failed_at = getattr(context, "failed_at", None)
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "event_type": event_type.upper(),
            "token_symbol": context.symbol,
            "token_name": context.name,
            "token_mint": context.mint_str,
            "creator": str(context.user),
            "started_at": context.started_at,
            "stage": context.stage.value,
            "failed_at": failed_at.value if failed_at else None,
            "signature": context.signature,
            "instruction_count": len(context.instructions),
            "buy_sol": buy_amount_sol,
            "error": str(error) if error else None,
            "error_type": type(error).__name__ if error else None,
        }
        if context.token_addresses:
            log_entry["bonding_curve"] = str(context.token_addresses.bonding_curve)
        if error is not None and hasattr(error, "broadcast"):
            log_entry["broadcast"] = error.broadcast

        if extra_data:
            log_entry.update(extra_data)

        log_message = json.dumps(log_entry)
        audit_log.info(log_message)

        if self.log_to_file:
            try:
                with open(self.filepath, "a") as f:
                    f.write(log_message + "\n")
            except OSError as e:
                audit_log.error(f"Failed to write audit log to file {self.filepath}: {e}")
        return log_entry

import logging
import traceback
from typing import Any, Dict, List


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the shared ``wvclient`` logger."""
    logger = logging.getLogger("wvclient")
    logger.setLevel(getattr(logging, level.upper()))

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


class BatchErrorLog:
    """Collects failures raised while uploading batches of objects."""

    def __init__(self):
        self.logger = logging.getLogger("wvclient")
        self.errors: List[Dict[str, Any]] = []

    def handle_error(self, error: Exception, context: Dict[str, Any]) -> Dict[str, Any]:
        """Process and log error with context information."""
        error_info = {
            "type": type(error).__name__,
            "message": str(error),
            "context": context,
            "traceback": traceback.format_exc() if self.logger.isEnabledFor(logging.DEBUG) else None
        }

        self.logger.error(
            "%s: %s | Context: %s", error_info["type"], error_info["message"], context
        )

        self.errors.append(error_info)

        return error_info

    def collect_batch_error(self, error: Exception, class_name: str, batch_size: int) -> Dict[str, Any]:
        """Record a batch request that failed as a whole."""
        context = {
            "class_name": class_name,
            "batch_size": batch_size,
            "stage": "request",
        }
        return self.handle_error(error, context)

    def collect_object_error(self, result: Dict[str, Any], class_name: str) -> Dict[str, Any]:
        """Record a single object the service rejected inside a batch."""
        errors = ((result.get("result") or {}).get("errors") or {}).get("error") or []
        messages = [
            str(entry.get("message", entry)) if isinstance(entry, dict) else str(entry)
            for entry in errors
        ]
        error_info = {
            "type": "ObjectError",
            "message": "; ".join(messages) or "unknown error",
            "context": {
                "class_name": class_name,
                "object_id": result.get("id"),
                "stage": "object",
            },
            "traceback": None,
        }
        self.logger.debug("Object %s rejected: %s", result.get("id"), error_info["message"])
        self.errors.append(error_info)
        return error_info

    def get_error_summary(self) -> Dict[str, Any]:
        """Generate summary of all collected errors."""
        if not self.errors:
            return {"total_errors": 0, "error_types": {}, "failed_batches": 0, "failed_objects": []}

        error_types: Dict[str, int] = {}
        failed_batches = 0
        failed_objects = []

        for error in self.errors:
            error_type = error["type"]
            error_types[error_type] = error_types.get(error_type, 0) + 1

            context = error.get("context", {})
            if context.get("stage") == "request":
                failed_batches += 1
            else:
                failed_objects.append({
                    "id": context.get("object_id"),
                    "error": error["message"],
                })

        return {
            "total_errors": len(self.errors),
            "error_types": error_types,
            "failed_batches": failed_batches,
            "failed_objects": failed_objects,
        }

    def format_error_report(self) -> str:
        """Format user-friendly error report."""
        summary = self.get_error_summary()

        if summary["total_errors"] == 0:
            return ""

        lines = [
            f"\n⚠️  Error Summary: {summary['total_errors']} errors occurred",
            ""
        ]

        if summary["error_types"]:
            lines.append("Error Types:")
            for error_type, count in summary["error_types"].items():
                lines.append(f"  • {error_type}: {count}")
            lines.append("")

        if summary["failed_batches"]:
            lines.append(f"Failed Batches: {summary['failed_batches']}")

        if summary["failed_objects"]:
            lines.append("Rejected Objects:")
            for failure in summary["failed_objects"][:5]:  # Show first 5
                lines.append(f"  • {failure['id'] or '?'}: {failure['error']}")

            if len(summary["failed_objects"]) > 5:
                lines.append(f"  ... and {len(summary['failed_objects']) - 5} more")

        return "\n".join(lines)

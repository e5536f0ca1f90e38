"""Entry: read a prompt-submit event from stdin and print activated skills."""
import sys

from skill_activation.config import LOG_LEVEL
from skill_activation.hook import HookInputError, run_hook
from skill_activation.logging_utils import configure_logging, get_logger

logger = get_logger(__name__)


def main() -> None:
    configure_logging(LOG_LEVEL)
    try:
        raw = sys.stdin.read()
        status = run_hook(raw)
    except HookInputError as e:
        logger.error("skill_activation_failed", error=str(e))
        print(f"Error in skill-activation-prompt hook: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.exception("skill_activation_failed")
        print(f"Error in skill-activation-prompt hook: {e!s}", file=sys.stderr)
        sys.exit(1)
    sys.exit(status)


if __name__ == "__main__":
    main()

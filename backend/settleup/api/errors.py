"""
Translation of balance engine errors into HTTP errors.
"""
import logging
from contextlib import contextmanager
from fastapi import HTTPException, status

from settleup.core.exceptions import InconsistencyError, ValidationError

logger = logging.getLogger(__name__)


@contextmanager
def ledger_http_errors():
    """Map ValidationError to 422 and InconsistencyError to 500."""
    try:
        yield
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=str(e)
        )
    except InconsistencyError as e:
        logger.error(f"Balance computation is inconsistent: {e} {e.mismatches}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Balance computation is inconsistent"
        )

"""Application factory and entry point.

Run with:
    uvicorn app:app --reload
"""

from __future__ import annotations

from fastapi import FastAPI

from api import DEFAULT_MAX_DIGITS, router, set_max_digits


def create_app(max_digits: int = DEFAULT_MAX_DIGITS) -> FastAPI:
    """Build and return the FastAPI application.

    ``max_digits`` bounds operand length and the estimated size of
    power and left-shift results; requests beyond it are rejected with 422.
    """
    set_max_digits(max_digits)

    app = FastAPI(
        title="BigInt Evaluation API",
        description=(
            "Evaluates arithmetic on arbitrary-precision decimal integers. "
            "Operands and results are exchanged as decimal strings."
        ),
        version="0.1.0",
    )
    app.include_router(router)
    return app


# Default app instance for `uvicorn app:app`
app = create_app()

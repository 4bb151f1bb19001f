"""
main.py — FastAPI Entry Point for the Payment Allocator

This module exposes the allocation engine over HTTP so that an order system can
submit a batch and receive the settlement directly.

Responsibilities:
    • Accept a batch of orders and payment methods via HTTP API
    • Run a fresh allocation per request (no state is kept between requests)
    • Return per-method totals and the per-order breakdown
    • Provide system health information
"""

from fastapi import FastAPI, HTTPException

from .engine import AllocationEngine
from .errors import AllocationError, ConfigurationError
from .logging_config import get_logger, setup_logging
from .models import AllocationRequest, AllocationResponse
from .reporter import method_summaries, order_allocations

# Initialization
# Configure logging and initialize FastAPI app
setup_logging()
log = get_logger(__name__)
app = FastAPI(title="Payment Allocator")


# API Endpoint: order system → allocation
@app.post("/v1/allocations", response_model=AllocationResponse)
def create_allocation(batch: AllocationRequest):
    """
    Allocates a batch of orders to the submitted payment methods.

    The payload is validated by the `AllocationRequest` model before this function
    runs; malformed batches are rejected by FastAPI with 422.

    Args:
        batch (AllocationRequest): Orders and the payment method catalog.

    Returns:
        AllocationResponse: Per-method paid/remaining totals (catalog order) and
        the payments of every order (submission order).

    Raises:
        HTTPException(422): If the method catalog is empty or lacks the points method.
        HTTPException(500): If the allocation could not be completed.
    """
    log.info(f"Neue Zuteilung angefragt: {len(batch.orders)} Bestellungen, {len(batch.paymentMethods)} Methoden.")
    try:
        engine = AllocationEngine(batch.paymentMethods)
        ledger = engine.run(batch.orders)
    except ConfigurationError as e:
        log.warning(f"Ungültiger Methodenkatalog: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    except AllocationError as e:
        log.critical(f"Zuteilung fehlgeschlagen: {e}")
        raise HTTPException(status_code=500, detail="Allocation did not complete.")

    return AllocationResponse(
        summary=method_summaries(ledger),
        orders=order_allocations(ledger, batch.orders),
    )


# Health Check Endpoint
@app.get("/health")
def health_check():
    """
    Simple health check endpoint for monitoring systems or container orchestrators.

    Returns:
        dict: A basic JSON object indicating service availability.
    """
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)

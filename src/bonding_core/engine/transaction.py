import logging
from contextlib import contextmanager

from bonding_core.ledger.base import MultiAssetLedger
from bonding_core.registry.asset_registry import AssetRegistry


logger = logging.getLogger(__name__)


@contextmanager
def transactional(ledger: MultiAssetLedger, registry: AssetRegistry, label: str = "operation"):
    """
    Scoped transaction over the ledger and the registry: if anything raises inside the
    block, both stores are put back exactly as they were and the error is re-raised.
    Scopes nest; an inner rollback leaves the outer scope free to roll back further.

    Snapshots are whole copies of both stores, so every scope costs time and memory linear in
    the number of balances and records held, and a nested scope pays it again.
    """
    ledger_state = ledger.snapshot()
    registry_state = registry.snapshot()
    try:
        yield
    except Exception as e:
        ledger.restore(ledger_state)
        registry.restore(registry_state)
        logger.warning(f"{label} rolled back: {getattr(e, 'kind', type(e).__name__)}: {e}")
        raise

import logging

log = logging.getLogger(__name__)

DAY = 24 * 60 * 60 * 1000

def sweep(store, days, now):
    """Removes positions not saved for more than ``days``

    Positions without save time are considered fresh and get ``now`` as
    their save time. Does nothing if ``days`` <= 0. Returns count of removed
    positions.
    """
    if days <= 0:
        return 0

    expire = days * DAY
    removed = 0
    for uri in store:
        position = store.get(uri)
        if position.saved_time is None:
            store.set(uri, position.stamped(now))
            continue

        if now - position.saved_time > expire:
            store.remove(uri)
            removed += 1

    if removed:
        log.info('Removed %d positions older than %d days', removed, days)

    return removed

"""Deterministic processing order for content models.

Some models must exist before others can reference them, so operators can
pin an explicit order. Everything not pinned follows, alphabetically.
"""

from collections.abc import Callable, Iterable, Sequence

from strapi_transfer.models.snapshot import META_KEY


def priority_ranks(priority: Sequence[str]) -> dict[str, int]:
    """Map each UID of a priority list to its position.

    A UID listed more than once keeps its first position.
    """
    ranks: dict[str, int] = {}
    for index, uid in enumerate(priority):
        ranks.setdefault(uid, index)
    return ranks


def ordering_key(priority: Sequence[str]) -> Callable[[str], tuple[int, str]]:
    """Build a sort key placing listed UIDs first, in list order.

    Unlisted UIDs get a rank equal to the list length and are then
    compared by UID string.
    """
    ranks = priority_ranks(priority)
    unlisted = len(priority)

    def key(uid: str) -> tuple[int, str]:
        return ranks.get(uid, unlisted), uid

    return key


def order_uids(uids: Iterable[str], priority: Sequence[str] = ()) -> list[str]:
    """Return ``uids`` in processing order.

    Args:
        uids: Discovered model UIDs; duplicates and ``meta`` are ignored
        priority: Operator supplied order

    Returns:
        UIDs from ``priority`` in its order, then the rest sorted

    Examples:
        >>> order_uids(["c", "a", "b"], ["b"])
        ['b', 'a', 'c']
        >>> order_uids(["meta", "x"])
        ['x']
    """
    unique = {uid for uid in uids if uid != META_KEY}
    return sorted(unique, key=ordering_key(priority))

"""
Base factories shared by all test modules.
"""

from datetime import datetime, timezone
from typing import Any

from hashtree.crypto.hashing import sha256


ABCDE: tuple[bytes, ...] = (b"A", b"B", b"C", b"D", b"E")


def make_items(count: int, prefix: str = "item") -> list[bytes]:
    """Create ``count`` distinct byte items."""
    return [f"{prefix}{i}".encode() for i in range(count)]


def make_records(count: int) -> list[dict[str, Any]]:
    """Create ``count`` structured records with mixed field types."""
    return [
        {
            "id": i,
            "name": f"record-{i}",
            "created_at": datetime(2026, 1, 27, 21, 35, i, tzinfo=timezone.utc),
            "tags": ["x", "y"][: i % 3],
            "note": None,
        }
        for i in range(count)
    ]


def scenario_digests() -> dict[str, bytes]:
    """
    Digests for the ABCDE example, computed by hand.

    hab = H(H(A) + H(B)), hcd = H(H(C) + H(D)), habcd = H(hab + hcd),
    E is carried, root = H(habcd + H(E)).
    """
    ha, hb, hc, hd, he = (sha256(x) for x in ABCDE)
    hab = sha256(ha + hb)
    hcd = sha256(hc + hd)
    habcd = sha256(hab + hcd)
    return {
        "A": ha,
        "B": hb,
        "C": hc,
        "D": hd,
        "E": he,
        "hab": hab,
        "hcd": hcd,
        "habcd": habcd,
        "root": sha256(habcd + he),
    }

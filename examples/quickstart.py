#!/usr/bin/env python3
"""
Shelfmark Quickstart — full bookmark lifecycle in one script.

Signs up two users, then walks one through create → list → update →
delete while checking the other can't touch those bookmarks.
Run with: python examples/quickstart.py

Requires: pip install httpx
Backend must be running: http://localhost:8000
"""

import sys

from _common import check_backend, create_client


def main():
    check_backend()

    print("\n1. Creating accounts...")
    alice = create_client("alice")
    bob = create_client("bob")

    # ── Create ────────────────────────────────────────────────────
    print("\n2. Alice adds a bookmark...")
    resp = alice.post("/bookmarks", json={
        "title": "Python docs",
        "description": "Standard library reference",
        "link": "https://docs.python.org/3/",
    })
    assert resp.status_code == 201, f"Failed: {resp.text}"
    bookmark = resp.json()
    bid = bookmark["id"]
    print(f"   Bookmark: {bookmark['title']} ({bid[:8]}...)")

    # ── List ──────────────────────────────────────────────────────
    print("\n3. Listing bookmarks...")
    mine = alice.get("/bookmarks").json()
    theirs = bob.get("/bookmarks").json()
    print(f"   Alice sees {len(mine)}, Bob sees {len(theirs)}")
    assert [b["id"] for b in mine] == [bid]
    assert theirs == []

    # ── Ownership ─────────────────────────────────────────────────
    print("\n4. Bob tries to read and edit Alice's bookmark...")
    for method in ("get", "patch", "delete"):
        kwargs = {"json": {"title": "hijacked"}} if method == "patch" else {}
        resp = getattr(bob, method)(f"/bookmarks/{bid}", **kwargs)
        print(f"   {method.upper():6s} → {resp.status_code} {resp.json()['detail']}")
        assert resp.status_code == 403

    # ── Update ────────────────────────────────────────────────────
    print("\n5. Alice updates the description only...")
    resp = alice.patch(f"/bookmarks/{bid}", json={"description": "Everything in stdlib"})
    assert resp.status_code == 200, f"Failed: {resp.text}"
    updated = resp.json()
    print(f"   title:       {updated['title']}")
    print(f"   description: {updated['description']}")
    assert updated["title"] == "Python docs"

    # ── Delete ────────────────────────────────────────────────────
    print("\n6. Alice deletes it...")
    resp = alice.delete(f"/bookmarks/{bid}")
    assert resp.status_code == 204, f"Failed: {resp.text}"
    resp = alice.get(f"/bookmarks/{bid}")
    print(f"   GET after delete → {resp.status_code}")
    assert resp.status_code == 404

    print("\n✓ Quickstart complete.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

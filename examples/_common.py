"""
Shared helpers for Shelfmark examples.

Handles the health check and account setup (signup + signin) so each
example can focus on its bookmark workflow.
"""

import sys
import uuid

import httpx

BASE = "http://localhost:8000/api/v1"


def check_backend() -> None:
    """Verify the backend is reachable and its database is connected."""
    try:
        resp = httpx.get(f"{BASE}/health", timeout=5)
    except httpx.ConnectError:
        print(f"ERROR: Backend not reachable at {BASE}")
        print("Start it with:  uvicorn shelfmark.main:app --reload --port 8000")
        sys.exit(1)

    if resp.status_code != 200:
        print(f"ERROR: Health check returned {resp.status_code}")
        sys.exit(1)

    health = resp.json()
    print("Backend health:")
    print(f"  Status:   {health['status']}")
    print(f"  Database: {health['database']}")

    if health["database"] != "ok":
        print("\nERROR: Database is not connected. Check SHELFMARK_DATABASE_URL and that Postgres is running.")
        sys.exit(1)


def authenticate(label: str = "demo") -> tuple[str, str]:
    """Sign up a fresh user and sign in, returning (email, token).

    Uses a unique email per run so examples are idempotent.
    """
    run_id = uuid.uuid4().hex[:8]
    email = f"{label}-{run_id}@example.com"
    password = "demo-password-123"

    resp = httpx.post(
        f"{BASE}/auth/signup",
        json={"fname": label.title(), "lname": run_id, "email": email, "password": password},
        timeout=10,
    )
    if resp.status_code != 201:
        print(f"ERROR: Signup failed: {resp.status_code} {resp.text}")
        sys.exit(1)

    resp = httpx.post(
        f"{BASE}/auth/signin",
        json={"email": email, "password": password},
        timeout=10,
    )
    if resp.status_code != 200:
        print(f"ERROR: Signin failed: {resp.status_code} {resp.text}")
        sys.exit(1)

    return email, resp.json()["token"]


def create_client(label: str = "demo") -> httpx.Client:
    """Authenticate a new user and return an httpx Client with auth headers."""
    email, token = authenticate(label)
    print(f"  Signed in: {email}")
    return httpx.Client(
        base_url=BASE,
        timeout=10,
        headers={"Authorization": f"Bearer {token}"},
    )

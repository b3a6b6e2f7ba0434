#!/usr/bin/env python3
"""
Sign in to the Firebase Auth Emulator and print an ID token for manual testing.

Usage:
    python scripts/get_test_token.py [--email EMAIL] [--password PASSWORD]

Start the emulator first (firebase emulators:start --only auth) and create the
user at http://localhost:4000.
"""

import argparse
import os
import sys

import requests

EMULATOR_HOST = os.environ.get("FIREBASE_AUTH_EMULATOR_HOST", "localhost:9099")
FIREBASE_API_KEY = "demo-key"  # Any value works against the emulator
API_URL = os.environ.get("WORKOUT_API_URL", "http://localhost:8000")


def sign_in(email: str, password: str) -> str:
    """Return an ID token for email/password from the emulator.

    Raises:
        requests.HTTPError: If the emulator rejects the credentials
    """
    url = (
        f"http://{EMULATOR_HOST}/identitytoolkit.googleapis.com/v1/"
        f"accounts:signInWithPassword?key={FIREBASE_API_KEY}"
    )
    response = requests.post(
        url,
        json={"email": email, "password": password, "returnSecureToken": True},
        timeout=10,
    )
    response.raise_for_status()
    return response.json()["idToken"]


def main():
    parser = argparse.ArgumentParser(description="Get an emulator ID token")
    parser.add_argument("--email", default="test@example.com")
    parser.add_argument("--password", default="hello1234")
    args = parser.parse_args()

    try:
        token = sign_in(args.email, args.password)
    except requests.exceptions.ConnectionError:
        print(f"✗ Could not connect to the Firebase Auth Emulator at {EMULATOR_HOST}")
        sys.exit(1)
    except requests.HTTPError as e:
        print(f"✗ Sign-in failed for {args.email}: {e.response.text}")
        sys.exit(1)

    print(f"✓ Signed in as {args.email}\n")
    print(f'export TOKEN="{token}"\n')
    print("Try it:")
    print(f'  curl -H "Authorization: Bearer $TOKEN" {API_URL}/api/v1/workouts/new')


if __name__ == "__main__":
    main()

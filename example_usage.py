#!/usr/bin/env python3
"""
Basic usage examples for HRworks Python client library.

Reads credentials from HRWORKS_ACCESS_KEY / HRWORKS_SECRET_KEY and talks to
the realm named by HRWORKS_REALM (defaults to production).
"""

import datetime
import logging
import sys

from hrworks_client import (
    HRworksClient,
    HRworksClientError,
    Request,
    ResponseError,
    get_person_master_data,
    get_persons
)


def demonstrate_signing():
    """Show the signed headers for a request without sending it."""

    print("=== Request Signing Example ===\n")

    client = HRworksClient("AK123", "SK456", realm="demo")
    fixed = datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)
    request = Request("GetPersons", {}, clock=lambda: fixed)
    request.prepare_for_sending(client)

    print("String to sign:")
    print(request.string_to_sign)
    print()
    for name, value in request.signed_headers().items():
        print(f"   {name}: {value}")
    print()


def main():
    """Run examples against the configured realm."""

    try:
        client = HRworksClient.from_env()
    except HRworksClientError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)

    print(f"=== HRworks Client Examples ({client.realm_name}) ===\n")

    with client:
        print("1. Listing active persons...")
        try:
            persons = client.send(get_persons(only_active=True))
            print(f"   ✓ {persons}")
        except ResponseError as e:
            print(f"   ✗ Request failed: {e.status_code}")
            print(f"   Response: {e.body}")
        print()

        print("2. Fetching master data by personnel number...")
        try:
            master_data = client.send(
                get_person_master_data(persons=["1"], use_personnel_numbers=True)
            )
            print(f"   ✓ {master_data}")
        except ResponseError as e:
            print(f"   ✗ Request failed: {e.status_code}")
            print(f"   Response: {e.body}")
        print()

        print("3. Sending with a wrong secret key...")
        with HRworksClient(client.access_key, "wrong-secret-key", realm=client.realm) as wrong_client:
            try:
                wrong_client.send(get_persons())
                print("   ✗ Unexpectedly accepted")
            except ResponseError as e:
                print(f"   ✓ Correctly rejected ({e.status_code})")
        print()


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)

    demonstrate_signing()
    main()

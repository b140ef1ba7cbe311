#!/usr/bin/env python3
"""
Load the demo catalogue (services and gallery photos) into a running site.

The data goes through the admin API, so it is validated exactly like a
form submission and the public views are revalidated.  Entries whose
title (services) or src (photos) already exist are skipped, which makes
the script safe to run more than once.

Usage:
    python seed_catalog.py --url http://localhost:8000 --username admin --password "secret"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import getpass
import sys

from party_planner_client import PartyPlannerClient


DEMO_SERVICES = [
    {
        "title": "Delicias de Mesa de Dulces",
        "description": "Mesas de dulces y postres personalizables para endulzar cualquier ocasión. ¡Elige tu tema y golosinas!",
        "iconName": "UtensilsCrossed",
        "image": "https://picsum.photos/seed/candybar/600/400",
        "aiHint": "mesa de dulces postres",
    },
    {
        "title": "Pasteles Personalizados",
        "description": "Desde elegancia simple hasta obras maestras personalizadas, creamos pasteles que saben tan bien como lucen.",
        "iconName": "CakeSlice",
        "image": "https://picsum.photos/seed/cake/600/400",
        "aiHint": "pastel boda cumpleaños",
    },
    {
        "title": "Renta de Mesas y Sillas",
        "description": "Proporciona asientos cómodos y elegantes para tus invitados. Varios estilos disponibles.",
        "iconName": "Armchair",
        "image": "https://picsum.photos/seed/rentals/600/400",
        "aiHint": "renta mesa silla evento",
    },
    {
        "title": "Servicio de Barra Libre",
        "description": "Servicio de bar profesional con una selección de bebidas para mantener la celebración fluyendo.",
        "iconName": "Wine",
        "image": "https://picsum.photos/seed/openbar/600/400",
        "aiHint": "bar cocteles bebidas",
    },
]

DEMO_PHOTOS = [
    {"src": "https://picsum.photos/seed/party1/1200/800", "alt": "Montaje colorido de fiesta con globos", "aiHint": "fiesta globos decoración"},
    {"src": "https://picsum.photos/seed/party2/1200/800", "alt": "Primer plano de un pastel bellamente decorado", "aiHint": "pastel decorado evento"},
    {"src": "https://picsum.photos/seed/party3/1200/800", "alt": "Invitados disfrutando bebidas en una barra libre", "aiHint": "fiesta invitados bebidas"},
    {"src": "https://picsum.photos/seed/party4/1200/800", "alt": "Montaje de mesa elegante para un evento", "aiHint": "montaje mesa evento"},
    {"src": "https://picsum.photos/seed/party5/1200/800", "alt": "Divertida mesa de dulces con varias golosinas", "aiHint": "mesa dulces golosinas"},
]


def seed(client: PartyPlannerClient) -> int:
    """Create the missing demo entries.  Returns the number of failures."""
    failures = 0

    services, error = client.list_services()
    if error:
        print(f"[!] Could not list services: {error['message']}", file=sys.stderr)
        return 1
    existing_titles = {service["title"] for service in services}
    for payload in DEMO_SERVICES:
        if payload["title"] in existing_titles:
            print(f"[=] Service already present: {payload['title']}")
            continue
        created, error = client.create_service(payload)
        if error:
            failures += 1
            print(f"[!] {payload['title']}: {error['message']}", file=sys.stderr)
        else:
            print(f"[+] Service created: {created['id']}")

    photos, error = client.list_photos()
    if error:
        print(f"[!] Could not list photos: {error['message']}", file=sys.stderr)
        return failures + 1
    existing_sources = {photo["src"] for photo in photos}
    for payload in DEMO_PHOTOS:
        if payload["src"] in existing_sources:
            print(f"[=] Photo already present: {payload['src']}")
            continue
        created, error = client.create_photo(payload)
        if error:
            failures += 1
            print(f"[!] {payload['src']}: {error['message']}", file=sys.stderr)
        else:
            print(f"[+] Photo created: {created['id']}")
    return failures


def main(argv=None):
    ap = argparse.ArgumentParser(description="Load the demo services and gallery photos.")
    ap.add_argument("--url", default="http://localhost:8000", help="Base URL of the running site")
    ap.add_argument("--username", required=True, help="Admin user name (ADMIN_USERNAME)")
    ap.add_argument("--password", help="Admin password. If omitted, you'll be prompted securely.")
    args = ap.parse_args(argv)

    password = args.password or getpass.getpass("Admin password: ")
    if not password:
        print("[!] Empty password is not allowed.", file=sys.stderr)
        sys.exit(1)

    client = PartyPlannerClient(base_url=args.url, username=args.username, password=password)
    failures = seed(client)
    if failures:
        sys.exit(2)


if __name__ == "__main__":
    main()

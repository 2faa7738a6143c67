"""Smoke test against a running tutorial backend.

Start the server first (``python tools/run_backend.py``), then run this
script. WARNING: the last step deletes every tutorial in the store.
"""

import json
import os

import requests

BASE = os.getenv("TUTORIAL_SELFTEST_BASE", "http://127.0.0.1:8080")
API = f"{BASE}/api/tutorials"
TIMEOUT = 15


def pretty(title, data):
    print("\n" + "=" * 60)
    print(">>> " + title)
    print("-" * 60)
    if isinstance(data, str):
        print(data)
    else:
        print(json.dumps(data, ensure_ascii=False, indent=2))


def check_health():
    print("\n[1] GET /health")
    r = requests.get(f"{BASE}/health", timeout=TIMEOUT)
    r.raise_for_status()
    pretty("health", r.json())


def create(title, description=None, published=False):
    r = requests.post(
        API,
        json={"title": title, "description": description, "published": published},
        timeout=TIMEOUT,
    )
    r.raise_for_status()
    data = r.json()
    pretty(f"created {title!r}", data)
    return data


def check_rejects_empty_title():
    print("\n[3] POST with empty title")
    r = requests.post(API, json={"title": "  "}, timeout=TIMEOUT)
    assert r.status_code == 400, r.text
    pretty("rejected", r.json())


def check_filters(first_id):
    print("\n[4] GET list / filter / published")
    r = requests.get(API, params={"title": "fastapi"}, timeout=TIMEOUT)
    r.raise_for_status()
    pretty("title contains 'fastapi'", r.json())

    r = requests.put(f"{API}/{first_id}", json={"published": True}, timeout=TIMEOUT)
    r.raise_for_status()
    pretty("publish first", r.json())

    r = requests.get(f"{API}/published", timeout=TIMEOUT)
    r.raise_for_status()
    published = r.json()
    pretty("published", published)
    assert all(item["published"] for item in published)


def check_delete(second_id):
    print("\n[5] DELETE one, then all")
    r = requests.delete(f"{API}/{second_id}", timeout=TIMEOUT)
    r.raise_for_status()
    pretty("delete one", r.json())

    r = requests.get(f"{API}/{second_id}", timeout=TIMEOUT)
    assert r.status_code == 404, r.text

    r = requests.delete(API, timeout=TIMEOUT)
    r.raise_for_status()
    pretty("delete all", r.json())

    r = requests.get(API, timeout=TIMEOUT)
    r.raise_for_status()
    assert r.json() == [], r.text


def main():
    check_health()
    print("\n[2] POST tutorials")
    first = create("FastAPI basics", "routing and models")
    second = create("Docker Compose", "three services, one network")
    check_rejects_empty_title()
    check_filters(first["id"])
    check_delete(second["id"])
    print("\nselftest finished")


if __name__ == "__main__":
    main()

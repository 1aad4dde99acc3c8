#!/usr/bin/env python3
"""
Basic usage examples for httpdefer
"""

import json
import time

import httpdefer


def example_simple_get():
    """Simple GET request with a base URL and default headers"""
    print("=== Simple GET Request ===")

    client = httpdefer.Client(
        "https://api.github.com",
        {"User-Agent": "httpdefer-example", "Accept": "application/json"},
    )
    if client.get("/users/github"):
        print(f"Status: {client.status_code}")
        print(f"Body: {client.response_body[:100]}...")
    else:
        print(f"Failed: {client.last_error}")


def example_headers():
    """Adding headers after construction"""
    print("\n=== Headers ===")

    client = httpdefer.Client("https://postman-echo.com")
    client.set_header("Content-Type", "application/json")
    client.set_header("X-Custom-Header", "test")
    print("Current headers:")
    for line in client.headers:
        print(f"  {line}")

    client.put("/put", json.dumps({"name": "test"}))
    print(f"PUT Status: {client.status_code}")

    client.delete("/delete")
    print(f"DELETE Status: {client.status_code}")


def example_async():
    """Fire a request, do other work, then collect it"""
    print("\n=== Async Request ===")

    first = httpdefer.Client()
    second = httpdefer.Client()

    start = time.perf_counter()
    first.get_async("https://api.github.com/users/github")
    second.get_async("https://api.github.com/users/google")

    first.wait()
    second.wait()
    elapsed = (time.perf_counter() - start) * 1000

    print(f"1. Status: {first.status_code}")
    print(f"2. Status: {second.status_code}")
    print(f"Both requests took {elapsed:.0f}ms")


def example_one_slot():
    """Only one async request per slot at a time"""
    print("\n=== One Outstanding Request ===")

    with httpdefer.Client("https://postman-echo.com") as client:
        print(f"First start:  {client.get_async('/delay/1')}")
        print(f"Second start: {client.get_async('/get')} ({client.last_error})")
        client.wait()
        print(f"Collected: {client.status_code}")


if __name__ == "__main__":
    print(f"httpdefer {httpdefer.info()}")
    example_simple_get()
    example_headers()
    example_async()
    example_one_slot()

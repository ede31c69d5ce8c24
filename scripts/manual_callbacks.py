#!/usr/bin/env python3
"""Send sample provider callbacks to a running server.

Usage:
    python scripts/manual_callbacks.py --scenario technical --row 12
    python scripts/manual_callbacks.py --scenario video --conversation-id c123
    python scripts/manual_callbacks.py --replay saved_callback.json --path /vapi-callback
    TEST_BASE_URL=https://staging.onrender.com python scripts/manual_callbacks.py --scenario health

Scenarios other than ``health`` write to the configured sheet and call the model.
"""

import argparse
import asyncio
import json
import os

import httpx

DEFAULT_BASE_URL = "http://localhost:8000"

SAMPLE_TRANSCRIPT = (
    "AI: Can you describe how you would support a resident who refuses personal care?\n"
    "User: I would stay calm, explain what I am doing, and offer choices. "
    "If they still refused I would record it and tell the senior carer."
)


def print_header(text: str):
    """Print section header."""
    print(f"\n{'=' * 60}")
    print(f"  {text}")
    print(f"{'=' * 60}\n")


def print_response(response: httpx.Response):
    """Print status and body of a response."""
    marker = "✓" if response.is_success else "✗"
    print(f"{marker} {response.status_code}")
    print(json.dumps(response.json(), indent=2))


def call_report(row: int, stage: str | None) -> dict:
    """Vapi end-of-call report for a phone stage."""
    metadata: dict = {"candidateName": "Manual Test", "rowNumber": row}
    if stage:
        metadata["stage"] = stage
    return {
        "message": {
            "type": "end-of-call-report",
            "transcript": SAMPLE_TRANSCRIPT,
            "call": {"id": "manual-call", "metadata": metadata},
        }
    }


def conversation_ended(conversation_id: str) -> dict:
    """Tavus ``ended`` callback for the video stage."""
    return {
        "conversation_id": conversation_id,
        "status": "ended",
        "transcript": SAMPLE_TRANSCRIPT,
        "recording_url": None,
    }


async def send(base_url: str, path: str, payload: dict):
    """POST one callback and print the result."""
    async with httpx.AsyncClient(base_url=base_url, timeout=120.0) as client:
        response = await client.post(path, json=payload)
    print_response(response)


async def check_health(base_url: str):
    """Print the health endpoint."""
    async with httpx.AsyncClient(base_url=base_url, timeout=30.0) as client:
        response = await client.get("/health")
    print_response(response)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Send sample hiring pipeline callbacks")
    parser.add_argument(
        "--scenario",
        choices=["screening", "technical", "video", "ignored", "health"],
        default="health",
    )
    parser.add_argument("--row", type=int, default=2, help="Sheet row for phone stages")
    parser.add_argument("--conversation-id", default="manual-conversation")
    parser.add_argument("--replay", help="Path to a saved callback JSON body")
    parser.add_argument("--path", default="/vapi-callback", help="Route used with --replay")
    parser.add_argument(
        "--url",
        help=f"Base URL for testing (default: $TEST_BASE_URL or {DEFAULT_BASE_URL})",
    )
    args = parser.parse_args()

    base_url = args.url or os.getenv("TEST_BASE_URL") or DEFAULT_BASE_URL
    print_header(f"{args.replay or args.scenario} -> {base_url}")

    if args.replay:
        with open(args.replay) as f:
            asyncio.run(send(base_url, args.path, json.load(f)))
    elif args.scenario == "health":
        asyncio.run(check_health(base_url))
    elif args.scenario == "video":
        payload = conversation_ended(args.conversation_id)
        asyncio.run(send(base_url, "/whaleagent-callback", payload))
    elif args.scenario == "ignored":
        asyncio.run(send(base_url, "/vapi-callback", {"message": {"type": "status-update"}}))
    else:
        stage = "lionagent" if args.scenario == "technical" else None
        asyncio.run(send(base_url, "/vapi-callback", call_report(args.row, stage)))


if __name__ == "__main__":
    main()

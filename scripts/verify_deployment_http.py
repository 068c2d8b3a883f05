#!/usr/bin/env python3
"""
Black Box Verification Script for a Live Deployment.

Walks the same path a user takes through the web form: health check,
transcript upload, summary generation and (optionally) sending the summary
by email.

Usage:
    python scripts/verify_deployment_http.py <BASE_URL> [RECIPIENT ...]

Example:
    python scripts/verify_deployment_http.py https://summarizer.example.com me@example.com
"""
import asyncio
import sys
import time
from datetime import datetime
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from client.summarizer_client import SummarizerClient
from models.session_state import SummarizerSession

SAMPLE_TRANSCRIPT = (
    "Alice: Let's review the Q3 roadmap.\n"
    "Bob: The billing migration slips two weeks; we need a new date from finance.\n"
    "Alice: Agreed. Bob owns the follow-up, due Friday.\n"
)
SAMPLE_INSTRUCTION = "Summarize in bullet points and list action items with owners."


def log(message: str):
    """Log with timestamp."""
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    print(f"[{timestamp}] {message}")


async def main():
    if len(sys.argv) < 2:
        print("Usage: python scripts/verify_deployment_http.py <BASE_URL> [RECIPIENT ...]")
        sys.exit(1)

    base_url = sys.argv[1].rstrip("/")
    recipients = sys.argv[2:]

    log("=" * 60)
    log("BLACK BOX VERIFICATION - Meeting Summarizer")
    log("=" * 60)
    log(f"Target URL: {base_url}")

    session = SummarizerSession(instruction=SAMPLE_INSTRUCTION)
    success = True

    async with SummarizerClient(base_url=base_url, timeout=300.0) as client:
        log("\n--- Step 1: Health Check ---")
        health = await client.health()
        log(f"Health: {health}")

        log("\n--- Step 2: Upload Transcript ---")
        uploaded = await client.upload_transcript(
            session, "sample-meeting.txt", SAMPLE_TRANSCRIPT.encode("utf-8")
        )
        log(f"Upload: {session.status.type.value} - {session.status.message}")
        if not uploaded or session.transcript != SAMPLE_TRANSCRIPT:
            log("FAIL: uploaded transcript did not round-trip")
            success = False

        log("\n--- Step 3: Generate Summary ---")
        start_time = time.time()
        generated = await client.generate_summary(session)
        log(f"Generate: {session.status.type.value} - {session.status.message}")
        log(f"Response Time: {time.time() - start_time:.2f}s")
        if generated:
            log(f"Summary preview: {session.summary[:300]}")
        else:
            success = False

        if recipients and generated:
            log("\n--- Step 4: Send Email ---")
            for recipient in recipients:
                session.add_recipient(recipient)
            sent = await client.send_email(session)
            log(f"Send: {session.status.type.value} - {session.status.message}")
            success = success and sent
        else:
            log("\nSkipping email step (no recipients given)")

    log("\n" + "=" * 60)
    log("VERIFICATION PASSED" if success else "VERIFICATION FAILED")
    log("=" * 60)

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    asyncio.run(main())

#!/usr/bin/env python3
"""
Check that the configured Gemini key works.
Usage (from the project root): python -m tools.check_gemini [--model gemini-2.5-flash]
"""

import argparse
import sys

from config.settings import get_settings
from cocina_ai.core.model_interface import GatewayError, ModelGateway


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Send a one-word test prompt to Gemini")
    parser.add_argument(
        "--model",
        type=str,
        default=None,
        help="Model to test (default: RECIPE_GEMINI_MODEL setting)"
    )
    parser.add_argument(
        "--prompt",
        type=str,
        default='Reply with the JSON string "hola"',
        help="Prompt to send"
    )
    return parser.parse_args()


def main():
    """Main CLI entry point."""
    args = parse_args()
    settings = get_settings()
    if args.model:
        settings = settings.model_copy(update={"gemini_model": args.model})

    gateway = ModelGateway.from_settings(settings)
    print(f"API key present: {bool(settings.gemini_api_key)}")
    print(f"Credential status: {gateway.credential_status.value}")

    if not gateway.is_configured():
        print(f"Not configured: {gateway.status_message()}", file=sys.stderr)
        sys.exit(1)

    print(f"Sending test request to {settings.gemini_model}...")
    try:
        text = gateway.call(args.prompt)
    except GatewayError as e:
        print(f"Error: {e} ({e.cause})", file=sys.stderr)
        sys.exit(1)

    print(f"Success! Response: {text}")


if __name__ == "__main__":
    main()

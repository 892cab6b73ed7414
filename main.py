#!/usr/bin/env python3
"""InspectorAI CLI."""

import argparse
import logging
import sys

from dotenv import load_dotenv

from config.settings import Settings
from orchestrator import InspectionAssistant
from react.prompts import WELCOME_MESSAGE


def main():
    """Main CLI entry point."""
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="InspectorAI - chat with an equipment inspection database"
    )
    parser.add_argument(
        "--question",
        "-q",
        type=str,
        help="Ask a single question and exit (default: interactive chat)"
    )
    parser.add_argument(
        "--provider",
        type=str,
        choices=["gemini", "openai", "anthropic"],
        default="gemini",
        help="LLM provider (default: gemini)"
    )
    parser.add_argument(
        "--model",
        type=str,
        help="Override the provider's default model"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for the synthetic inspection dataset"
    )
    parser.add_argument(
        "--max-tool-rounds",
        type=int,
        default=5,
        help="Maximum tool rounds per question (default: 5)"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s"
    )

    settings = Settings(
        llm_provider=args.provider,
        llm_model=args.model,
        dataset_seed=args.seed,
        max_tool_rounds=args.max_tool_rounds,
        verbose=args.verbose,
    )

    assistant = InspectionAssistant(settings=settings)

    if args.question:
        print(assistant.send_message(args.question))
        return

    print(WELCOME_MESSAGE)
    print("(type 'reset' to start a new conversation, 'exit' to quit)\n")

    while True:
        try:
            text = input("You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not text:
            continue
        if text.lower() in ("exit", "quit"):
            break
        if text.lower() == "reset":
            assistant.reset()
            print("\nStarted a new conversation.\n")
            continue

        response = assistant.send_message(text)
        print(f"\nInspectorAI: {response}\n")

        if args.verbose and assistant.last_result:
            print(
                f"[rounds used: {assistant.last_result.rounds_used}, "
                f"tools called: {assistant.last_result.tools_called}]\n",
                file=sys.stderr
            )


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
# Grounded knowledge chat

Interactive loop that answers questions from the knowledge base.

Usage: ``python main.py [config.yaml]``
"""

import logging
import sys

from knowledge_grounding import ChatService, load_config


def main(argv: list[str]) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    config = load_config(argv[1] if len(argv) > 1 else None)
    service = ChatService.from_config(config)
    history: list[dict[str, str]] = []

    print("\nAsk a question about the knowledge base.")
    print("Type 'exit' to quit.")

    while True:
        user_input = input("\n> ")
        if user_input.lower() == "exit":
            print("\nGoodbye!")
            break

        result = service.chat({"message": user_input, "history": history})
        print(result.response)

        history.append({"role": "user", "content": user_input})
        history.append({"role": "assistant", "content": result.response})


if __name__ == "__main__":
    main(sys.argv)

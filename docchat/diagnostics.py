"""Connectivity checks for the configured model and workflow webhook.

Run ``docchat-check`` to see whether the API key is present, whether the
model answers a short prompt, and whether the webhook responds.
"""

import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv
from pydantic import ValidationError

from docchat.agent.chat_agent import AgentService, ModelError
from docchat.agent.config import MIN_API_KEY_LENGTH, get_agent_config
from docchat.relay.config import get_relay_config
from docchat.relay.workflow import WorkflowClient, WorkflowError

logger = logging.getLogger(__name__)


async def check_model(prompt: str) -> bool:
    try:
        config = get_agent_config()
    except ValidationError as e:
        logger.error(f"Model configuration invalid: {e}")
        return False

    logger.info(f"Provider: {config.provider}, model: {config.resolved_model}")
    logger.info(f"API key present, length {len(config.api_key)}")
    if len(config.api_key) < MIN_API_KEY_LENGTH:
        logger.warning("API key seems too short")

    try:
        answer = await AgentService(config).get_response(prompt)
    except ModelError as e:
        logger.error(f"Model request failed: {e}")
        return False

    if not answer:
        logger.error("Model returned an empty answer")
        return False
    logger.info(f"Model answered: {answer[:200]}")
    return True


async def check_workflow(prompt: str) -> bool:
    config = get_relay_config().workflow
    if not config.is_configured:
        logger.error("N8N_BASE_URL / N8N_WEBHOOK_PATH not set")
        return False

    logger.info(f"Posting to {config.url}")
    try:
        answer = await WorkflowClient(config).ask(prompt, top_k=5, temperature=0.7)
    except WorkflowError as e:
        logger.error(f"Workflow request failed: {e}")
        return False

    if not answer.output:
        logger.error("Workflow returned no output")
        return False
    logger.info(f"Workflow answered: {answer.output[:200]}")
    return True


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s - %(message)s")

    parser = argparse.ArgumentParser(description="Check DocChat backend connectivity.")
    parser.add_argument(
        "target",
        nargs="?",
        choices=("model", "workflow", "all"),
        default="all",
    )
    parser.add_argument("--prompt", default="Hello, are you working?")
    args = parser.parse_args(argv)

    results: list[bool] = []
    if args.target in ("model", "all"):
        results.append(asyncio.run(check_model(args.prompt)))
    if args.target in ("workflow", "all"):
        results.append(asyncio.run(check_workflow(args.prompt)))
    return 0 if all(results) else 1


if __name__ == "__main__":
    sys.exit(main())

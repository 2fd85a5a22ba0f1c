"""Prompt builder: catalog generation prompt and embedding-input text."""

import json
from textwrap import dedent

from actionfinder.schemas.catalog import Action, App

_EXAMPLE_CATALOG = [
    {
        "name": "gmail",
        "description": "Send emails with Google Mail.",
        "actions": [
            {"name": "send_email", "description": "Send an email to a recipient."},
            {"name": "forward_email", "description": "Forward an existing email."},
            {"name": "apply_label", "description": "Apply a label to an email."},
        ],
    }
]

_CATALOG_PROMPT = dedent("""\
    You are a helpful assistant that generates synthetic data for a workflow automation platform.
    Generate {app_count} unique apps with their names and descriptions.
    For each app, also generate at least {min_actions} actions with their names and descriptions.
    Provide the output in plain JSON format without any formatting.
    You are not writing markdown, you are writing JSON data.
    Example:
    """) + "{example}"

EMBEDDING_TEXT_TEMPLATE = (
    "App: {app_name}.\n"
    "App description: {app_description}.\n"
    "\n"
    "Action: {action_name}.\n"
    "Action description: {action_description}."
)


def build_catalog_prompt(app_count: int, min_actions: int) -> str:
    return _CATALOG_PROMPT.format(
        app_count=app_count,
        min_actions=min_actions,
        example=json.dumps(_EXAMPLE_CATALOG, indent=2),
    )


def build_embedding_text(app: App, action: Action) -> str:
    """Text embedded for an action; the same template must be used at query time for self-retrieval."""
    return EMBEDDING_TEXT_TEMPLATE.format(
        app_name=app.name,
        app_description=app.description,
        action_name=action.name,
        action_description=action.description,
    )

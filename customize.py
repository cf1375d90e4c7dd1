#!/usr/bin/env python3
"""Ad hoc runner for the fragrance recipe engine.

Generate a customized recipe from feedback JSON without the web application.

Usage:
    python customize.py '{"perfumeId": "BK-2201", "retentionPercentage": 60}'
    python customize.py --json '<feedback JSON>'      # camelCase JSON record
    python customize.py --debug '<feedback JSON>'     # Recipe card plus full JSON
    python customize.py --prompt '<feedback JSON>'    # Perfumer prompt only
    python customize.py --adjust '{"perfumeId": "BK-2201", "sweetness": 5}'
    python customize.py --list                        # Available scents

Features:
- Persona lookup by perfumeId (unknown ids exit with status 1)
- Markdown recipe card or JSON output (OUTPUT_FORMAT or --json)
- Quick-feedback adjustment advisor
- Clean exit after completion
"""

import json
import sys

from pydantic import ValidationError
from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from scentlab.catalog.personas import PersonaNotFoundError, get_catalog
from scentlab.engine.adjustments import recommend_adjustments
from scentlab.engine.pipeline import generate_custom_recipe
from scentlab.hooks.normalize_feedback import normalize_feedback_payload
from scentlab.models.models import AdjustmentFeedback, AdjustmentRecommendation, Feedback, Recipe
from scentlab.prompts.prompts import build_custom_recipe_prompt
from scentlab.utils.config import config
from scentlab.utils.logger import logger

console = Console()

USAGE = "Usage: python customize.py [--debug] [--json] [--prompt] [--adjust] [--list] '<feedback JSON>'"


def render_recipe_markdown(recipe: Recipe) -> str:
    """Render a recipe as a markdown card.

    Args:
        recipe: Generated recipe.

    Returns:
        Markdown text with both batch sizes, the test guide and the explanation.
    """
    lines = [f"# {recipe.based_on}", "", recipe.description, ""]

    for title, items in (("10ml", recipe.recipe_10ml), ("50ml", recipe.recipe_50ml)):
        lines += [f"## {title}", "", "| 향료 | 배합량 | 비율 |", "|---|---|---|"]
        lines += [f"| {item.name} | {item.amount} | {item.percentage}% |" for item in items]
        lines.append("")

    lines += ["## 시향 테스트", ""]
    lines += [
        f"- **{mixture.id}** {mixture.name}: {mixture.count}알 ({mixture.ratio}%)"
        for mixture in recipe.test_guide.scent_mixtures
    ]
    lines += ["", recipe.test_guide.instructions, ""]

    lines += [
        "## 설명",
        "",
        recipe.explanation.rationale,
        "",
        recipe.explanation.expected_result,
        "",
        recipe.explanation.recommendation,
    ]
    return "\n".join(lines)


def render_adjustments_markdown(recommendation: AdjustmentRecommendation) -> str:
    lines = [f"# {recommendation.perfume_name} ({recommendation.perfume_id})", ""]
    lines += [
        f"- {adjustment.note_name or adjustment.description}: {adjustment.amount}"
        for adjustment in recommendation.adjustments
    ]
    lines += ["", recommendation.explanation]
    return "\n".join(lines)


def parse_payload(raw: str) -> dict:
    """Parse the feedback argument, which must be a JSON object with perfumeId.

    Raises:
        ValueError: If the argument is not a JSON object or lacks perfumeId.
    """
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Feedback must be valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise ValueError("Feedback must be a JSON object")
    if not payload.get("perfumeId"):
        raise ValueError("Feedback must include perfumeId")
    return payload


def print_available_scents() -> None:
    table = Table(title="Available scents")
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Description")
    for scent in get_catalog().available_scents():
        table.add_row(scent.id, scent.name, scent.category.value, scent.description)
    console.print(table)


def run_customize(
    raw: str,
    debug: bool = False,
    as_json: bool = False,
    prompt_only: bool = False,
    adjust: bool = False,
) -> int:
    """Run one customization request and print the result.

    Args:
        raw: Feedback JSON (or quick-feedback JSON with ``adjust``).
        debug: Also print the full JSON record.
        as_json: Print the JSON record instead of the markdown card.
        prompt_only: Print the perfumer prompt instead of running the engine.
        adjust: Run the quick-feedback adjustment advisor.

    Returns:
        Process exit status (0 on success, 1 on invalid input or unknown perfume).
    """
    try:
        payload = parse_payload(raw)
        profile = get_catalog().get(payload["perfumeId"])
        logger.info(f"Customizing {profile.name}", extra={"perfume_id": profile.id})

        if adjust:
            result = recommend_adjustments(AdjustmentFeedback.model_validate(payload), profile)
            markdown = render_adjustments_markdown(result)
        elif prompt_only:
            feedback = Feedback.model_validate(normalize_feedback_payload(payload))
            console.print(build_custom_recipe_prompt(feedback, profile.name), markup=False)
            return 0
        else:
            result = generate_custom_recipe(profile, payload)
            markdown = render_recipe_markdown(result)

        record = result.model_dump(mode="json", by_alias=True)
        if as_json or config.OUTPUT_FORMAT == "json":
            console.print_json(data=record)
            return 0

        if debug:
            console.print("[bold cyan]Debug Mode: Full Response[/bold cyan]")
            console.print("[dim]" + "=" * 60 + "[/dim]")
            console.print_json(data=record)
            console.print("[dim]" + "=" * 60 + "[/dim]")
            console.print()

        console.print(Markdown(markdown))
        return 0

    except PersonaNotFoundError as e:
        console.print(f"[red]✗ Error: {e}[/red]")
        return 1
    except (ValueError, ValidationError) as e:
        console.print(f"[red]✗ Error: {e}[/red]")
        return 1


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(USAGE)
        print("")
        print("Examples:")
        print("  python customize.py '{\"perfumeId\": \"BK-2201\", \"retentionPercentage\": 60}'")
        print("  python customize.py --adjust '{\"perfumeId\": \"BK-2201\", \"sweetness\": 5}'")
        print("  python customize.py --list")
        sys.exit(1)

    flags = {"--debug": False, "--json": False, "--prompt": False, "--adjust": False, "--list": False}
    argv_start = 1

    while argv_start < len(sys.argv) and sys.argv[argv_start].startswith("--"):
        if sys.argv[argv_start] not in flags:
            print(f"Unknown flag: {sys.argv[argv_start]}")
            sys.exit(1)
        flags[sys.argv[argv_start]] = True
        argv_start += 1

    if flags["--list"]:
        print_available_scents()
        sys.exit(0)

    if argv_start >= len(sys.argv):
        print("Error: No feedback provided")
        print(USAGE)
        sys.exit(1)

    # Join all arguments after flags (handles JSON split by the shell)
    raw_feedback = " ".join(sys.argv[argv_start:])

    sys.exit(
        run_customize(
            raw_feedback,
            debug=flags["--debug"],
            as_json=flags["--json"],
            prompt_only=flags["--prompt"],
            adjust=flags["--adjust"],
        )
    )

#!/usr/bin/env python3
"""
CLI tool for running the Cocina AI features from the command line.
Usage (from the project root): python -m tools.query_cli search "what can I cook with corn and beef"
"""

import argparse
import json
import sys

from config.settings import get_settings
from cocina_ai.core.context import build_context


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Run Cocina AI features locally",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m tools.query_cli recipes empanada
  python -m tools.query_cli substitute "merkén" -r vegan -c "pebre"
  python -m tools.query_cli search "leftover corn and cheese"
  python -m tools.query_cli meal-plan --skill beginner --budget low
  python -m tools.query_cli shopping "Cazuela=beef,potatoes,corn" "Pebre=tomato,onion"
  python -m tools.query_cli --mock --json search "quick lunch"
        """
    )

    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use the canned mock model instead of Gemini"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Output results as JSON"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    recipes = subparsers.add_parser("recipes", help="Search the recipe catalog")
    recipes.add_argument("query", nargs="?", default="", help="Text to match")

    substitute = subparsers.add_parser("substitute", help="Ingredient substitutions")
    substitute.add_argument("ingredient", help="Ingredient to replace")
    substitute.add_argument("-r", "--restriction", action="append", default=[],
                            help="Dietary restriction (repeatable)")
    substitute.add_argument("-c", "--context", default="", help="Recipe context")

    search = subparsers.add_parser("search", help="Smart search for a cooking problem")
    search.add_argument("query", help="Free-text cooking problem")

    plan = subparsers.add_parser("meal-plan", help="Weekly meal plan")
    plan.add_argument("--skill", help="Cooking skill level")
    plan.add_argument("--prep-time", help="quick, moderate or elaborate")
    plan.add_argument("--budget", help="Budget level")
    plan.add_argument("-g", "--goal", action="append", default=[], help="Dietary goal (repeatable)")
    plan.add_argument("-r", "--restriction", action="append", default=[],
                      help="Dietary restriction (repeatable)")

    shopping = subparsers.add_parser("shopping", help="Shopping list for recipes")
    shopping.add_argument("recipes", nargs="+", help='Recipes as "Name=ingredient,ingredient"')
    shopping.add_argument("--servings", type=int, default=4, help="Servings (default: 4)")

    return parser.parse_args()


def parse_recipe_arg(value: str) -> dict:
    """Parse "Name=a,b,c" into a recipe dict."""
    name, _, ingredients = value.partition("=")
    return {
        "name": name.strip(),
        "ingredients": [i.strip() for i in ingredients.split(",") if i.strip()]
    }


def format_recipe(recipe) -> str:
    """Format a catalog recipe for display."""
    output = []
    output.append(f"\n{'='*60}")
    output.append(f"  #{recipe.id} {recipe.name}")
    output.append(f"  Time: {recipe.cooking_time} | Difficulty: {recipe.difficulty}")
    output.append(f"{'='*60}")
    output.append(f"  {recipe.description}")
    output.append(f"\n  Ingredients: {', '.join(recipe.ingredients)}")
    return "\n".join(output)


def format_result(command: str, result) -> str:
    """Format an AI feature result for display."""
    output = []
    if command == "substitute":
        for i, sub in enumerate(result, 1):
            output.append(f"{i}. {sub.get('substitute', '?')} ({sub.get('ratio', '')})")
            output.append(f"   Why: {sub.get('reason', '')}")
            if sub.get("notes"):
                output.append(f"   Notes: {sub['notes']}")
    elif command == "search":
        for suggestion in result.get("primary_suggestions", []):
            output.append(f"- {suggestion.get('dish_name', '?')}: {suggestion.get('description', '')}")
            output.append(f"  {suggestion.get('prep_time', '')} | {suggestion.get('difficulty', '')}")
        for option in result.get("alternative_options", []):
            output.append(f"* {option.get('option', '')}: {option.get('explanation', '')}")
        output.append(f"\n{result.get('general_advice', '')}")
    elif command == "meal-plan":
        for day in result.get("week_plan", []):
            meals = " / ".join(
                day.get(slot, {}).get("dish", "-") for slot in ("breakfast", "lunch", "dinner")
            )
            output.append(f"{day.get('day', '?'):<10} {meals}")
        output.append(f"\nEstimated cost: {result.get('estimated_total_cost', '')}")
    else:
        for section in result.get("sections", []):
            output.append(f"\n[{section.get('name', '')}]")
            for item in section.get("items", []):
                output.append(f"  - {item.get('item', '')}: {item.get('quantity', '')}")
        output.append(f"\nTotal: {result.get('total_estimated_cost', '')}")
        for tip in result.get("money_saving_tips", []):
            output.append(f"  tip: {tip}")
    return "\n".join(output)


def main():
    """Main CLI entry point."""
    args = parse_args()

    settings = get_settings()
    if args.mock:
        settings = settings.model_copy(update={"use_mock": True})
    context = build_context(settings)

    if args.command == "recipes":
        matches = context.catalog.search(args.query)
        if args.json:
            print(json.dumps([r.to_summary() for r in matches], indent=2, ensure_ascii=False))
        elif not matches:
            print("No matching recipes found.")
        else:
            print(f"Found {len(matches)} recipes:")
            for recipe in matches:
                print(format_recipe(recipe))
        return

    if not context.gateway.is_configured():
        print(f"Error: {context.gateway.status_message()} (use --mock to run offline)", file=sys.stderr)
        sys.exit(1)

    service = context.ai_service
    if args.command == "substitute":
        result = service.get_ingredient_substitutions(args.ingredient, args.restriction, args.context)
    elif args.command == "search":
        result = service.smart_search(args.query)
    elif args.command == "meal-plan":
        result = service.create_meal_plan({
            "skillLevel": args.skill,
            "prepTime": args.prep_time,
            "budget": args.budget,
            "dietaryGoals": args.goal,
            "dietaryRestrictions": args.restriction,
        })
    else:
        recipes = [parse_recipe_arg(value) for value in args.recipes]
        result = service.generate_shopping_list(recipes, {"servings": args.servings})

    if args.json:
        print(json.dumps(result, indent=2, ensure_ascii=False))
    else:
        print(format_result(args.command, result))


if __name__ == "__main__":
    main()

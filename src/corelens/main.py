"""CoreLens CLI - Find standard alternatives and redundant code in a corpus."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from corelens.catalog import default_catalog
from corelens.config import EngineConfig, load_config
from corelens.corpus import Module, load_analyses, load_corpus
from corelens.errors import CoreLensError, ValidationError
from corelens.providers.llm import LLMTextGenerator
from corelens.recommendations import FitToStandardGenerator
from corelens.redundancy import RedundancyDetector
from corelens.redundancy.clusters import STRATEGIES, build_clusters
from corelens.savings import SavingsCalculator

console = Console()


def _print_json(data) -> None:
    console.print_json(json.dumps(data))


def _make_detector(config: EngineConfig, use_llm: bool) -> RedundancyDetector:
    # torch/transformers load only when embeddings are actually needed
    from corelens.providers.embeddings import CodeBERTEmbedder

    embedder = CodeBERTEmbedder(max_chars=config.redundancy.max_embedding_chars)
    generator = LLMTextGenerator() if use_llm else None
    return RedundancyDetector(embedder, generator, config.redundancy, config.bands)


def _find_pairs(args: argparse.Namespace, config: EngineConfig):
    objects = load_corpus(Path(args.corpus))
    detector = _make_detector(config, use_llm=not args.no_llm)
    with console.status("[bold green]Embedding and comparing code objects..."):
        pairs = asyncio.run(detector.find_redundancies(objects, threshold=args.threshold))
    return objects, detector, pairs


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_catalog(args: argparse.Namespace, config: EngineConfig) -> int:
    """List or search the standards catalog."""
    catalog = default_catalog()

    if args.search:
        entries = catalog.search(args.search)
    elif args.module:
        try:
            Module.parse(args.module)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        entries = catalog.get_by_module(args.module)
    else:
        entries = catalog.get_all()

    if args.json:
        _print_json([e.to_dict() for e in entries])
        return 0

    table = Table(title=f"Standards Catalog ({len(entries)} entries)")
    table.add_column("ID", style="cyan")
    table.add_column("Kind")
    table.add_column("Module")
    table.add_column("Description", style="dim")

    for entry in entries:
        table.add_row(entry.id, entry.kind.value, entry.module.value, entry.description)

    console.print(table)
    return 0


def cmd_recommend(args: argparse.Namespace, config: EngineConfig) -> int:
    """Suggest standard alternatives for every object in a corpus."""
    analyses = load_analyses(Path(args.corpus))
    generator = FitToStandardGenerator(default_catalog(), config.fit_to_standard)

    recommendations = []
    for analysis in analyses:
        recommendations.extend(
            generator.recommend(analysis, args.min_confidence, args.max)
        )

    if args.json:
        _print_json([r.to_dict() for r in recommendations])
        return 0

    if not recommendations:
        console.print("[yellow]No standard alternatives found.[/yellow]")
        return 0

    table = Table(title="Fit-to-Standard Recommendations")
    table.add_column("Object", style="cyan")
    table.add_column("Standard", style="green")
    table.add_column("Confidence", justify="right")
    table.add_column("Effort")
    table.add_column("LOC Saved", justify="right")

    for rec in recommendations:
        table.add_row(
            rec.code_object.name,
            f"{rec.entry.name} ({rec.entry.kind.value})",
            f"{rec.confidence:.0%}",
            rec.effort.value,
            str(rec.savings.loc_reduction),
        )

    console.print(table)
    return 0


def cmd_redundancy(args: argparse.Namespace, config: EngineConfig) -> int:
    """Detect redundant objects in a corpus."""
    _, detector, pairs = _find_pairs(args, config)
    stats = detector.get_statistics(pairs)
    clusters = (
        build_clusters(pairs, args.strategy, config.savings.cluster_savings_ratio)
        if args.clusters else []
    )

    if args.json:
        data = {
            "redundancies": [p.to_dict() for p in pairs],
            "statistics": stats.to_dict(),
        }
        if args.clusters:
            data["clusters"] = [c.to_dict() for c in clusters]
        _print_json(data)
        return 0

    table = Table(title=f"Redundancies ({stats.total_redundancies})")
    table.add_column("Object 1", style="cyan")
    table.add_column("Object 2", style="cyan")
    table.add_column("Similarity", justify="right")
    table.add_column("Effort")
    table.add_column("LOC Saved", justify="right")

    for pair in pairs:
        table.add_row(
            pair.first.name,
            pair.second.name,
            f"{pair.similarity:.1%}",
            pair.savings.effort.value,
            str(pair.savings.loc_reduction),
        )
    console.print(table)

    console.print(Panel(
        f"Very high (≥95%): {stats.very_high_similarity}\n"
        f"High (≥85%): {stats.high_similarity}\n"
        f"Medium (≥75%): {stats.medium_similarity}\n"
        f"Potential savings: {stats.total_potential_savings} LOC",
        title="Statistics",
    ))

    for i, cluster in enumerate(clusters, 1):
        console.print(Panel(
            f"[bold]{', '.join(m.name for m in cluster.members)}[/bold]\n"
            f"Average similarity: {cluster.average_similarity:.1%}\n"
            f"{cluster.recommendation}",
            title=f"Cluster {i}",
        ))

    return 0


def cmd_savings(args: argparse.Namespace, config: EngineConfig) -> int:
    """Project consolidation savings and print a plan."""
    objects, _, pairs = _find_pairs(args, config)
    calculator = SavingsCalculator(config.savings, config.bands)
    total_loc = sum(obj.line_count for obj in objects)

    projection = calculator.calculate_projection(pairs, total_loc)
    plan = calculator.generate_consolidation_plan(pairs)
    quick_wins = calculator.identify_quick_wins(pairs)

    if args.json:
        _print_json({
            "projection": projection.to_dict(),
            "plan": plan.to_dict(),
            "quick_wins": [p.to_dict() for p in quick_wins],
        })
        return 0

    console.print(Panel(calculator.generate_summary(projection), title="Savings Projection"))

    table = Table(title=f"Consolidation Plan (priority: {plan.priority})")
    table.add_column("Objects", style="cyan")
    table.add_column("Similarity", justify="right")
    table.add_column("Effort")
    table.add_column("LOC Saved", justify="right")

    for item in plan.items:
        table.add_row(
            " + ".join(item.names),
            f"{item.similarity:.1%}",
            item.effort,
            str(item.savings),
        )
    console.print(table)
    console.print(f"Estimated effort: [bold]{plan.estimated_effort}[/bold]")

    if quick_wins:
        console.print("\n[green]Quick wins:[/green]")
        for pair in quick_wins:
            console.print(f"  • {' + '.join(pair.names)} ({pair.savings.loc_reduction} LOC)")

    return 0


def main(argv=None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="corelens",
        description="Fit-to-standard and redundancy analysis for legacy ABAP code",
    )
    parser.add_argument("--json", action="store_true", help="Emit JSON instead of tables")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Catalog command
    catalog_parser = subparsers.add_parser("catalog", help="List standard alternatives")
    catalog_parser.add_argument("-m", "--module", help="Filter by module (SD, MM, FI, ...)")
    catalog_parser.add_argument("-s", "--search", help="Keyword search")
    catalog_parser.set_defaults(func=cmd_catalog)

    # Recommend command
    recommend_parser = subparsers.add_parser("recommend", help="Suggest standard alternatives")
    recommend_parser.add_argument("corpus", help="Path to a JSON corpus file")
    recommend_parser.add_argument(
        "--min-confidence",
        type=float,
        default=None,
        help="Minimum match confidence (default: 0.5)",
    )
    recommend_parser.add_argument(
        "--max",
        type=int,
        default=None,
        help="Maximum recommendations per object",
    )
    recommend_parser.set_defaults(func=cmd_recommend)

    # Redundancy and savings commands share their detection options
    for name, func, help_text in (
        ("redundancy", cmd_redundancy, "Detect redundant code objects"),
        ("savings", cmd_savings, "Project consolidation savings"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("corpus", help="Path to a JSON corpus file")
        sub.add_argument(
            "-t", "--threshold",
            type=float,
            default=None,
            help="Similarity threshold (default: 0.85)",
        )
        sub.add_argument(
            "--no-llm",
            action="store_true",
            help="Use template recommendations instead of calling the LLM",
        )
        sub.set_defaults(func=func)
        if name == "redundancy":
            sub.add_argument("--clusters", action="store_true", help="Group pairs into clusters")
            sub.add_argument(
                "--strategy",
                choices=STRATEGIES,
                default="connected",
                help="Clustering strategy (default: connected)",
            )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    try:
        config = load_config()
        return args.func(args, config)
    except CoreLensError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""Rich terminal formatter for arch-insight."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..analysis.models import ArchitectureAnalysisResult
from ..architecture.models import ViolationType
from ..ddd.models import DddRole
from ..graph.cycles import group_cycles_by_severity
from ..graph.models import CycleSeverity
from .base import BaseFormatter

_SEVERITY_STYLE = {
    CycleSeverity.HIGH: "red bold",
    CycleSeverity.MEDIUM: "yellow",
    CycleSeverity.LOW: "green",
}

_VIOLATION_STYLE = {
    ViolationType.LAYER_VIOLATION: "red",
    ViolationType.CIRCULAR_DEPENDENCY: "magenta",
    ViolationType.DEPENDENCY_INVERSION: "yellow",
}


def _confidence_label(conf: float) -> str:
    if conf >= 0.75:
        return f"[green]{conf:.2f}[/green]"
    elif conf >= 0.5:
        return f"[yellow]{conf:.2f}[/yellow]"
    else:
        return f"[dim]{conf:.2f}[/dim]"


class RichFormatter(BaseFormatter):
    """Summary panel followed by tables for layers, violations, cycles and roles."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console or Console()
        self.verbose = verbose

    def render(self, result: ArchitectureAnalysisResult) -> None:
        self._print_summary(result)
        self._print_layers(result)
        self._print_violations(result)
        self._print_cycles(result)
        self._print_roles(result)
        self._print_role_scores(result)
        if self.verbose:
            self._print_packages(result)
            self._print_diagnostics(result)

    def format(self, result: ArchitectureAnalysisResult) -> str:
        with self.console.capture() as capture:
            self.render(result)
        return capture.get()

    def _print_summary(self, result: ArchitectureAnalysisResult) -> None:
        graph = result.dependency_graph
        layered = result.layered_architecture
        ddd = result.ddd_patterns
        lines = [
            f"[bold]Declarations:[/bold] {len(graph.nodes)}   "
            f"[bold]Edges:[/bold] {len(graph.edges)}   "
            f"[bold]Cycles:[/bold] {len(graph.cycles)}",
            f"[bold]Pattern:[/bold] [cyan]{layered.pattern.value}[/cyan]   "
            f"[bold]Layers:[/bold] {len(layered.layers)}   "
            f"[bold]Violations:[/bold] {len(layered.violations)}",
            f"[bold]Entities:[/bold] {len(ddd.entities)}   "
            f"[bold]Value objects:[/bold] {len(ddd.value_objects)}   "
            f"[bold]Services:[/bold] {len(ddd.services)}   "
            f"[bold]Repositories:[/bold] {len(ddd.repositories)}   "
            f"[bold]Aggregates:[/bold] {len(ddd.aggregates)}   "
            f"[bold]Events:[/bold] {len(ddd.domain_events)}",
        ]
        self.console.print(
            Panel("\n".join(lines), title="[bold cyan]Architecture[/bold cyan]", expand=False)
        )

    def _print_layers(self, result: ArchitectureAnalysisResult) -> None:
        layered = result.layered_architecture
        if not layered.layers:
            return
        table = Table(title="Layers", show_lines=False)
        table.add_column("Layer", style="cyan")
        table.add_column("Level", justify="right")
        table.add_column("Classes", justify="right")
        table.add_column("Depends on")
        for layer in layered.layers:
            targets = [
                f"{d.to_layer} ({d.dependency_count})"
                if d.is_valid
                else f"[red]{d.to_layer} ({d.dependency_count})[/red]"
                for d in layered.dependencies
                if d.from_layer == layer.name
            ]
            table.add_row(layer.name, str(layer.level), str(len(layer.classes)), ", ".join(targets))
        self.console.print(table)

    def _print_violations(self, result: ArchitectureAnalysisResult) -> None:
        violations = result.layered_architecture.violations
        if not violations:
            return
        table = Table(title="Violations")
        table.add_column("Type")
        table.add_column("From")
        table.add_column("To")
        if self.verbose:
            table.add_column("Suggestion", style="dim")
        for v in violations:
            style = _VIOLATION_STYLE.get(v.violation_type, "")
            row = [f"[{style}]{v.violation_type.value}[/{style}]", v.from_class, v.to_class]
            if self.verbose:
                row.append(v.suggestion)
            table.add_row(*row)
        self.console.print(table)

    def _print_cycles(self, result: ArchitectureAnalysisResult) -> None:
        grouped = group_cycles_by_severity(result.dependency_graph.cycles)
        if not grouped:
            return
        self.console.print("[bold]Dependency cycles[/bold]")
        for severity, cycles in grouped.items():
            style = _SEVERITY_STYLE[severity]
            self.console.print(f"  [{style}]{severity.value.upper()}[/{style}] ({len(cycles)})")
            for cycle in cycles:
                path = " -> ".join(cycle.nodes + cycle.nodes[:1])
                self.console.print(f"    {path}", highlight=False)

    def _print_roles(self, result: ArchitectureAnalysisResult) -> None:
        ddd = result.ddd_patterns
        rows = (
            [("entity", e.qualified_name, e.confidence) for e in ddd.entities]
            + [("value object", v.qualified_name, v.confidence) for v in ddd.value_objects]
            + [("service", s.qualified_name, s.confidence) for s in ddd.services]
            + [("repository", r.qualified_name, r.confidence) for r in ddd.repositories]
            + [("domain event", e.qualified_name, e.confidence) for e in ddd.domain_events]
            + [("aggregate", a.root_entity, a.confidence) for a in ddd.aggregates]
        )
        if not rows:
            return
        table = Table(title="DDD roles")
        table.add_column("Role", style="cyan")
        table.add_column("Declaration")
        table.add_column("Confidence", justify="right")
        for role, name, confidence in rows:
            table.add_row(role, name, _confidence_label(confidence))
        self.console.print(table)

    def _print_role_scores(self, result: ArchitectureAnalysisResult) -> None:
        if not result.role_scores:
            return
        roles = [role.value for role in DddRole]
        table = Table(title="Raw role scores")
        table.add_column("Declaration")
        for role in roles:
            table.add_column(role.replace("_", " "), justify="right")
        table.add_column("Best", style="cyan")
        for entry in result.role_scores:
            best_role, best_score = entry.best()
            table.add_row(
                entry.qualified_name,
                *(f"{entry.scores.get(role, 0.0):.2f}" for role in roles),
                best_role.replace("_", " ") if best_score > 0 else "-",
            )
        self.console.print(table)

    def _print_packages(self, result: ArchitectureAnalysisResult) -> None:
        packages = result.dependency_graph.packages
        if not packages:
            return
        table = Table(title="Packages")
        table.add_column("Package")
        table.add_column("Layer", style="cyan")
        table.add_column("Classes", justify="right")
        table.add_column("Depends on", justify="right")
        table.add_column("Cohesion", justify="right")
        for pkg in packages:
            table.add_row(
                pkg.package_name or "(default)",
                pkg.layer or "-",
                str(len(pkg.classes)),
                str(len(pkg.dependencies)),
                f"{pkg.cohesion:.2f}",
            )
        self.console.print(table)

    def _print_diagnostics(self, result: ArchitectureAnalysisResult) -> None:
        for d in result.diagnostics:
            self.console.print(
                f"[yellow]{d.kind.value}[/yellow] {escape(d.subject)}: {escape(d.message)}",
                highlight=False,
            )

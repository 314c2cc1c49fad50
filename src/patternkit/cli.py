"""CLI entry point."""

from __future__ import annotations

import click

from .core.errors import PatternKitError


@click.group()
def main() -> None:
    """Composable object framework demos."""


@main.command()
@click.option("--config", default=None, help="Config file path (TOML)")
@click.option("--dish", default="Tacos", help="What the butler serves")
@click.option(
    "--hat",
    "hats",
    multiple=True,
    help="Hat to wrap around the butler, innermost first (repeatable)",
)
@click.option(
    "--failure-policy",
    type=click.Choice(["raise", "collect"]),
    default=None,
    help="Override hub.failure_policy",
)
def demo(config: str | None, dish: str, hats: tuple[str, ...], failure_policy: str | None) -> None:
    """Serve a dish through a decorated butler and print the effect order."""
    from .main import DEFAULT_HATS, run

    overrides: dict = {}
    if failure_policy:
        overrides["hub"] = {"failure_policy": failure_policy}

    try:
        result = run(
            config_path=config,
            overrides=overrides,
            dish=dish,
            hats=hats or DEFAULT_HATS,
        )
    except PatternKitError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(result.served)
    click.echo("Layers:  " + " -> ".join(result.layers))
    click.echo("Effects:")
    for entry in result.effects:
        click.echo(f"  {entry}")
    click.echo("Moods:   " + ", ".join(str(m) for m in result.moods))


@main.command()
def kinds() -> None:
    """List registered kinds and family defaults."""
    from .catalogue import build_default_registry

    registry = build_default_registry()
    for kind in registry.list_kinds():
        click.echo(kind)
    for family in registry.list_families():
        click.echo(f"{family}/* (family default)")


@main.command()
@click.argument("kind")
@click.argument("value", default="you")
@click.option("--param", "params", multiple=True, help="key=value constructor param")
@click.option("--strict", is_flag=True, help="Disable family fallback")
def create(kind: str, value: str, params: tuple[str, ...], strict: bool) -> None:
    """Create KIND from the default registry and invoke it with VALUE."""
    from .catalogue import build_default_registry
    from .factory.builder import DescriptorBuilder

    builder = DescriptorBuilder(kind)
    for item in params:
        key, sep, raw = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got {item!r}", param_hint="--param")
        builder.param(key, raw)

    registry = build_default_registry(allow_family_fallback=not strict)
    try:
        product = registry.create(builder.build())
    except PatternKitError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(product.invoke(value))


if __name__ == "__main__":
    main()

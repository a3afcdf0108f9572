from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import typer

from bundles.config import LexiconConfig, get_config
from bundles.errors import LexiconError
from bundles.loader import available_locales, export_bundle, load_bundle, load_bundle_file
from bundles.logging_config import setup_logging
from bundles.registry import BundleRegistry
from bundles.templating import format_template
from bundles.validation import check_bundle, compare_bundles

app = typer.Typer(help="Consulta y valida paquetes de traducciones del editor")

LocalesDir = typer.Option(None, "--locales-dir", help="Directorio adicional con paquetes .json o .js")


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Nivel de log (DEBUG, INFO, WARNING...)"),
) -> None:
    cfg = get_config()
    setup_logging(log_level or cfg.log_level, cfg.log_file)


def _config(locales_dir: Optional[Path]) -> LexiconConfig:
    if locales_dir is None:
        return get_config()
    return LexiconConfig(locales_dir=locales_dir.resolve())


def _fail(error: Exception) -> typer.Exit:
    typer.echo(f"Error: {error}", err=True)
    return typer.Exit(code=1)


def _parse_args(raw: Optional[List[str]]) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for item in raw or []:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise typer.BadParameter(f"Se esperaba NOMBRE=VALOR, recibido {item!r}", param_hint="--arg")
        values[name.strip()] = value
    return values


@app.command()
def locales(locales_dir: Optional[Path] = LocalesDir) -> None:
    """Lista los idiomas disponibles."""

    cfg = _config(locales_dir)
    for code in available_locales(cfg.search_paths):
        typer.echo(code)


@app.command()
def get(
    locale: str = typer.Argument(..., help="Codigo de idioma, p. ej. eo"),
    key: str = typer.Argument(..., help="Ruta con puntos, p. ej. common.ok"),
    fallback: bool = typer.Option(False, help="Usar el idioma por defecto si falta la clave"),
    locales_dir: Optional[Path] = LocalesDir,
) -> None:
    """Muestra la plantilla de una clave."""

    cfg = _config(locales_dir)
    try:
        if fallback:
            text = BundleRegistry.from_config(cfg).get(locale, key)
        else:
            text = load_bundle(locale, cfg.search_paths).get(key)
    except LexiconError as error:
        raise _fail(error) from error
    typer.echo(text)


@app.command("format")
def format_command(
    locale: str = typer.Argument(..., help="Codigo de idioma"),
    key: str = typer.Argument(..., help="Ruta con puntos de la plantilla"),
    arg: Optional[List[str]] = typer.Option(None, "--arg", "-a", help="Valor NOMBRE=VALOR; repetible (1=3, url=...)"),
    strict: Optional[bool] = typer.Option(None, "--strict/--lenient", help="Fallar si queda algun marcador"),
    locales_dir: Optional[Path] = LocalesDir,
) -> None:
    """Rellena los marcadores de una plantilla."""

    cfg = _config(locales_dir)
    values = _parse_args(arg)
    try:
        template = load_bundle(locale, cfg.search_paths).get(key)
        text = format_template(template, values, strict=cfg.strict_format if strict is None else strict)
    except LexiconError as error:
        raise _fail(error) from error
    typer.echo(text)


@app.command()
def keys(
    locale: str = typer.Argument(..., help="Codigo de idioma"),
    prefix: Optional[str] = typer.Option(None, help="Solo claves bajo este espacio, p. ej. table.cell"),
    locales_dir: Optional[Path] = LocalesDir,
) -> None:
    """Lista las claves de un idioma."""

    cfg = _config(locales_dir)
    try:
        bundle = load_bundle(locale, cfg.search_paths)
    except LexiconError as error:
        raise _fail(error) from error
    start = f"{prefix.rstrip('.')}." if prefix else ""
    for path in bundle.keys():
        if path.startswith(start):
            typer.echo(path)


@app.command()
def validate(
    locale: str = typer.Argument(..., help="Codigo de idioma a revisar"),
    against: Optional[str] = typer.Option(None, help="Idioma de referencia para comparar claves y marcadores"),
    locales_dir: Optional[Path] = LocalesDir,
) -> None:
    """Revisa plantillas vacias y, opcionalmente, la cobertura frente a otro idioma."""

    cfg = _config(locales_dir)
    try:
        bundle = load_bundle(locale, cfg.search_paths)
        report = check_bundle(bundle)
        if against:
            report.extend(compare_bundles(bundle, load_bundle(against, cfg.search_paths)))
    except LexiconError as error:
        raise _fail(error) from error

    for message in report.errors:
        typer.echo(f"ERROR {message}", err=True)
    for message in report.warnings:
        typer.echo(f"WARN  {message}", err=True)
    if not report.ok:
        raise typer.Exit(code=1)
    typer.echo(f"{bundle.code}: {len(bundle)} claves OK")


@app.command()
def export(
    source: Path = typer.Argument(..., help="Archivo .js o .json de origen"),
    dest: Path = typer.Argument(..., help="Archivo .json de destino"),
    code: Optional[str] = typer.Option(None, help="Codigo de idioma; por defecto el nombre del archivo"),
) -> None:
    """Convierte un paquete (p. ej. lang/eo.js del editor) a JSON."""

    try:
        bundle = load_bundle_file(source, code)
        export_bundle(bundle, dest)
    except LexiconError as error:
        raise _fail(error) from error
    typer.echo(f"{bundle.code}: {len(bundle)} claves -> {dest}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()

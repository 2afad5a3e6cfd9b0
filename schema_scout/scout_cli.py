import logging
from pathlib import Path
import importlib.metadata
import json
from typing import Optional
from schema_scout.data.formats import Format
from schema_scout.data.inference import detect, infer_domain, infer_schema
from schema_scout.data.sampling import SAMPLE_LINES
from schema_scout.utils.json2md import config_to_markdown
import typer

app = typer.Typer(help="Infer the schema of a data file and write it as a YAML ingestion config")

# shells pass a typed \t as two characters
_SEPARATOR_ESCAPES = {"\\t": "\t", "tab": "\t"}


def _unescape_separator(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return _SEPARATOR_ESCAPES.get(value, value)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable info logging"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
):
    if version:
        version_str = importlib.metadata.version("schema_scout")
        typer.echo(version_str)
        raise typer.Exit()
    level = logging.WARNING
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    logging.basicConfig(level=level)

@app.command()
def infer(
    domain: str = typer.Argument(..., help="Name of the domain"),
    schema: str = typer.Argument(..., help="Name of the schema"),
    data_path: str = typer.Argument(..., help="Path or abfss:// URL of the data file"),
    save_path: Path = typer.Argument(..., help="Path of the YAML file to write"),
    header: bool = typer.Option(False, "--header", help="First row of a delimited file holds the column names"),
    separator: str = typer.Option(None, "--separator", "-s", callback=_unescape_separator, help="Use this delimiter instead of detecting one (\\t or tab for a tab)"),
    encoding: str = typer.Option(None, "--encoding", "-e", help="Text encoding (detected when omitted)"),
    sample_size: int = typer.Option(SAMPLE_LINES, "--sample-size", help="Number of lines used to detect the delimiter"),
    literal_pattern: bool = typer.Option(False, "--literal-pattern", help="Escape regex characters of the file name in the schema pattern"),
    markdown: bool = typer.Option(False, "--markdown", help="Print the inferred schema as markdown"),
):
    """
    Infer the schema of a data file and write the domain configuration.
    """
    try:
        result = infer_schema(
            domain,
            schema,
            data_path,
            str(save_path),
            header,
            separator=separator,
            encoding=encoding,
            sample_size=sample_size,
            literal_pattern=literal_pattern,
        )
        config = result.unwrap()
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if markdown:
        typer.echo(config_to_markdown(config.to_dict()))
    else:
        typer.echo(f"Schema written to {save_path}")

@app.command()
def show(
    data_path: str = typer.Argument(..., help="Path or abfss:// URL of the data file"),
    header: bool = typer.Option(False, "--header", help="First row of a delimited file holds the column names"),
    separator: str = typer.Option(None, "--separator", "-s", callback=_unescape_separator, help="Use this delimiter instead of detecting one (\\t or tab for a tab)"),
    markdown: bool = typer.Option(False, "--markdown", help="Output in markdown format instead of JSON"),
):
    """
    Print the inferred configuration without writing it.
    """
    try:
        name = Path(data_path).stem
        config = infer_domain(name, name, data_path, header, separator=separator).to_dict()
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if markdown:
        typer.echo(config_to_markdown(config))
    else:
        typer.echo(json.dumps(config, indent=2))

@app.command(name="detect")
def detect_cmd(
    data_path: str = typer.Argument(..., help="Path or abfss:// URL of the data file"),
    sample_size: int = typer.Option(SAMPLE_LINES, "--sample-size", help="Number of lines used to detect the delimiter"),
    encoding: str = typer.Option(None, "--encoding", "-e", help="Text encoding (detected when omitted)"),
):
    """
    Print the detected container format, delimiter and encoding of a file.
    """
    try:
        found = detect(data_path, encoding=encoding, sample_size=sample_size)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(json.dumps({
        "format": found.format.name,
        "array": found.format is Format.ARRAY_JSON,
        "separator": found.separator,
        "encoding": found.encoding,
    }, indent=2))

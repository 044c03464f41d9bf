#!/usr/bin/env python3
"""
Miniwing CLI
Scans markup for class names and compiles the matching utility CSS.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import click

from core.css_reader import count_rules
from core.html_scanner import filter_utility_classes, scan_files
from core.stylesheet_assembler import StylesheetAssembler
from core.token_store import TokenTable
from core.utility_resolver import UtilityResolver
from tailwind.config_reader import load_and_merge_tokens
from utils.file_utils import find_markup_files, write_file_content

DEFAULT_OUTPUT = Path('dist') / 'output.css'


def _output_settings(config: Dict[str, Any]) -> Dict[str, Any]:
    output = config.get('output')
    return output if isinstance(output, dict) else {}


def _scan_paths(files: Sequence[str], src_dir: Optional[str], config: Dict[str, Any],
                config_dir: Path) -> List[Path]:
    """Files given on the command line win, then --src-dir, then the config's scan list.

    Relative scan entries are taken from the config file's directory.
    """
    if files:
        return [Path(f) for f in files]
    if src_dir:
        return find_markup_files(src_dir)
    scan = config.get('scan')
    if isinstance(scan, list):
        return [config_dir / p for p in scan if isinstance(p, str)]
    return []


def _echo_token_summary(tokens: TokenTable) -> None:
    click.echo('\nToken Summary:')
    for category, count in tokens.summary().items():
        click.echo(f'  - {category}: {count}')


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Show debug logging.')
def cli(verbose: bool) -> None:
    """Miniwing - utility-first CSS generated from design tokens."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )


@cli.command()
@click.argument('files', nargs=-1, type=click.Path())
@click.option('--tokens', 'tokens_path', type=click.Path(), default=None, help='Path to tokens.json.')
@click.option('--config', 'config_path', type=click.Path(), default=None, help='Path to the miniwing config.')
@click.option('--output', '-o', 'output_path', type=click.Path(), default=None, help='Where to write the CSS.')
@click.option('--copy-to', 'copy_to', type=click.Path(), multiple=True, help='Extra paths to copy the CSS to.')
@click.option('--src-dir', type=click.Path(file_okay=False), default=None, help='Scan every markup file here.')
@click.option('--filter/--no-filter', 'filter_utilities', default=False,
              help='Drop class names that do not look like utilities before resolving.')
def build(files, tokens_path, config_path, output_path, copy_to, src_dir, filter_utilities) -> None:
    """Scan markup files and write the generated stylesheet."""
    click.echo('Starting miniwing build...')
    click.echo('=' * 40)

    click.echo('\n[1] Loading design tokens...')
    loaded = load_and_merge_tokens(tokens_path, config_path)
    click.echo(f'Tokens {loaded.describe()}')

    click.echo('\n[2] Scanning files for class names...')
    config_dir = loaded.config_path.parent if loaded.config_path else Path.cwd()
    class_names = scan_files(_scan_paths(files, src_dir, loaded.config, config_dir))
    if filter_utilities:
        class_names = filter_utility_classes(class_names)
    click.echo(f'Found {len(class_names)} unique class names')

    click.echo('\n[3] Generating CSS from tokens...')
    settings = _output_settings(loaded.config)
    resolver = UtilityResolver(loaded.tokens, utilities=loaded.config.get('utilities'))
    assembler = StylesheetAssembler(resolver, include_header=settings.get('comments', True) is not False)
    result = assembler.build(class_names)

    output = Path(output_path or settings.get('path') or DEFAULT_OUTPUT)
    try:
        write_file_content(output, result.css)
        click.echo(f'CSS compiled to: {output}')
        for target in copy_to:
            write_file_content(Path(target), result.css)
            click.echo(f'CSS copied to: {target}')
    except OSError as e:
        click.echo(f'Error writing CSS: {e}', err=True)
        sys.exit(1)

    click.echo(f'{count_rules(result.css)} rule(s) emitted, {len(result.skipped)} class name(s) skipped')
    click.echo('\n' + '=' * 40)
    click.echo('miniwing build complete!')
    _echo_token_summary(loaded.tokens)


@cli.command()
@click.argument('class_names', nargs=-1, required=True)
@click.option('--tokens', 'tokens_path', type=click.Path(), default=None, help='Path to tokens.json.')
@click.option('--config', 'config_path', type=click.Path(), default=None, help='Path to the miniwing config.')
def resolve(class_names, tokens_path, config_path) -> None:
    """Print the CSS rule for each class name."""
    loaded = load_and_merge_tokens(tokens_path, config_path)
    resolver = UtilityResolver(loaded.tokens, utilities=loaded.config.get('utilities'))
    for class_name in class_names:
        rule = resolver.css_rule(class_name)
        click.echo(rule if rule else f'/* no rule for {class_name} */')


@cli.command()
@click.option('--tokens', 'tokens_path', type=click.Path(), default=None, help='Path to tokens.json.')
@click.option('--config', 'config_path', type=click.Path(), default=None, help='Path to the miniwing config.')
def tokens(tokens_path, config_path) -> None:
    """Show how many tokens each category holds after merging."""
    loaded = load_and_merge_tokens(tokens_path, config_path)
    click.echo(f'Tokens {loaded.describe()}')
    _echo_token_summary(loaded.tokens)


if __name__ == "__main__":
    cli()

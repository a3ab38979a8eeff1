"""
Command-line interface for seqedit.

Commands for checking, ordering and applying edits written
in compact notation (Δ1-2, 11TAC, G16C).
"""

import logging
import sys

import click

from . import __version__
from .config import NotationConfig, load_reference
from .core.haplotype import Haplotype
from .core.notation import format_edits, parse_edits
from .errors import SeqEditError
from .utils.sequence import ALPHABETS


@click.group()
@click.version_option(version=__version__)
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False),
              help='YAML configuration file')
@click.option('--alphabet', type=click.Choice(sorted(ALPHABETS)),
              help='Alphabet for inserted and substituted bases (default: dna)')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, config_path, alphabet, verbose):
    """seqedit: parse, order and apply sequence edits."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    try:
        config = NotationConfig.from_yaml(config_path) if config_path else NotationConfig()
        if alphabet:
            config.alphabet = alphabet
    except ValueError as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(1)

    ctx.obj = config


def _parse_tokens(config: NotationConfig, tokens, reference=None):
    check_against = reference if config.check_reference else None
    try:
        return parse_edits(
            tokens, config.sequence_type, config.symbol_type, reference=check_against
        )
    except SeqEditError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _load_reference(value):
    try:
        return load_reference(value)
    except ValueError as e:
        click.echo(f"Error loading reference sequence: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument('tokens', nargs=-1, required=True)
@click.pass_obj
def parse(config, tokens):
    """
    Parse edit TOKENS and print their positions as TSV.

    \b
    Example:
      seqedit parse Δ1-2 11TAC G16C
    """
    from .io.edit_table import annotate_edits

    edits = _parse_tokens(config, tokens)
    df = annotate_edits(edits, unknown_base=config.unknown_base)
    click.echo(df.to_csv(sep='\t', index=False), nl=False)


@cli.command(name='sort')
@click.argument('tokens', nargs=-1, required=True)
@click.pass_obj
def sort_edits(config, tokens):
    """Print edit TOKENS in reference order."""
    edits = _parse_tokens(config, tokens)
    click.echo(format_edits(sorted(edits), unknown_base=config.unknown_base))


@cli.command()
@click.option('--reference', '-r', type=str, required=True,
              help='Reference: sequence or FASTA file path')
@click.argument('tokens', nargs=-1, required=True)
@click.pass_obj
def apply(config, reference, tokens):
    """
    Apply edit TOKENS to a reference and print the mutated sequence.

    \b
    Example:
      seqedit apply -r ACGTACGTACGT Δ1-2 5TT T8C
    """
    ref_seq = _load_reference(reference)
    edits = _parse_tokens(config, tokens, reference=ref_seq)

    try:
        haplotype = Haplotype(reference=ref_seq, edits=edits)
    except SeqEditError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    logging.getLogger(__name__).info(
        f"Applying {len(edits)} edits (length change {haplotype.length_delta:+d} bp)"
    )
    click.echo(haplotype.apply())


@cli.command()
@click.argument('input_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', type=click.Path(), required=True,
              help='Output TSV file')
@click.option('--reference', '-r', type=str,
              help='Reference: sequence or FASTA file path (used by check_reference)')
@click.option('--skip-invalid', is_flag=True,
              help='Drop rows with malformed edits instead of failing')
@click.pass_obj
def table(config, input_path, output, reference, skip_invalid):
    """Annotate the edits in a TSV file and write the rows in edit order to OUTPUT."""
    from .io.edit_table import annotate_table, load_edit_table, write_edit_table

    ref_seq = _load_reference(reference) if reference else None

    try:
        df = load_edit_table(input_path, config, reference=ref_seq, skip_invalid=skip_invalid)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    annotated = annotate_table(df)
    write_edit_table(annotated, output)
    click.echo(f"Wrote {len(annotated)} edits to {output}")


if __name__ == '__main__':
    cli()

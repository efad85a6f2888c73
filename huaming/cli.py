#!/usr/bin/env python3
"""
HuaMing CLI
===========
Command-line interface for Chinese name suggestions.

Usage:
    huaming translate "Emily" --gender feminine
    huaming segment "John"
    huaming describe 明 华
    huaming lexicon --position first --gender masculine
"""

import argparse
import json
import logging
import re
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from huaming import __version__
from huaming.settings import cli_settings, get_setting

logger = logging.getLogger(__name__)

# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False, console: Console = None, err_console: Console = None):
        self.quiet = quiet
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def print(self, *args, **kwargs):
        if not self.quiet:
            self.console.print(*args, **kwargs)

    def json(self, data):
        """Print JSON; never suppressed, since it is the requested result."""
        print(json.dumps(data, ensure_ascii=False, indent=2))

    def error(self, msg: str):
        self.err_console.print(f"Error: {msg}", markup=False, highlight=False)

    def table(self, headers: list, rows: list, title: str = None):
        """Print a formatted table."""
        if self.quiet:
            return

        table = Table(title=title)
        for header in headers:
            table.add_column(str(header))
        for row in rows:
            table.add_row(*(str(c) for c in row))
        self.console.print(table)


def configure_logging(verbose: bool = False):
    """Route library logging through rich."""
    from huaming.config import config

    level = logging.DEBUG if verbose else getattr(logging, config().log_level, logging.WARNING)
    logging.basicConfig(
        level=level,
        format=get_setting('logging.format', '%(message)s'),
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def validate_name(name: str) -> tuple[bool, str]:
    """Validate a Latin-script name input."""
    if not name or not name.strip():
        return False, "Name cannot be empty"

    name = name.strip()

    limits = cli_settings()
    if len(name) > limits.name_max_length:
        return False, f"Name must be at most {limits.name_max_length} characters"

    if not re.match(limits.name_pattern, name):
        return False, "Name must start with a letter and contain only letters, spaces, hyphens or apostrophes"

    return True, name


# =============================================================================
# Commands
# =============================================================================

def cmd_translate(args, out: Output):
    """Suggest Chinese names for a Latin-script name."""
    from huaming import NameSynthesizer, resolve_gender
    from huaming.config import config

    valid, result = validate_name(args.name)
    if not valid:
        out.error(result)
        return 1
    name = result

    cfg = config()
    gender = resolve_gender(args.gender or cfg.default_gender)
    seed = args.seed if args.seed is not None else cfg.seed

    synthesizer = NameSynthesizer(seed=seed, data_dir=cfg.lexicon_dir)
    suggestions = synthesizer.translate(name, gender)

    if args.json:
        out.json([s.to_dict() for s in suggestions])
        return 0

    rows = []
    for i, suggestion in enumerate(suggestions, 1):
        meanings = ' / '.join(c.meaning for c in suggestion.characters)
        rows.append([
            i,
            suggestion.chinese_name,
            suggestion.pinyin,
            meanings,
            f"{suggestion.tone_pattern} ({suggestion.tone_harmony})",
        ])
    out.table(['#', 'Name', 'Pinyin', 'Meaning', 'Tones'], rows,
              title=f"{cli_settings().table_title}: {name} ({gender})")

    if args.verbose:
        for i, suggestion in enumerate(suggestions, 1):
            body = '\n\n'.join(
                [suggestion.meaning, suggestion.cultural_reference]
                + [c.description for c in suggestion.characters]
            )
            out.print(Panel(body, title=f"{i}. {suggestion.chinese_name}", expand=False))

    return 0


def cmd_segment(args, out: Output):
    """Show the phonetic tokens of a name."""
    from huaming import PhoneticSegmenter, get_lexicon
    from huaming.config import config

    lexicon = get_lexicon(config().lexicon_dir)
    tokens = PhoneticSegmenter(lexicon).segment(args.name.lower())

    if args.json:
        out.json(tokens)
        return 0

    rows = []
    for i, token in enumerate(tokens, 1):
        matches = lexicon.transliterations(token)
        rows.append([i, token, ' '.join(matches) if matches else '-'])
    out.table(['#', 'Token', 'Transliterations'], rows, title=f"Segments of '{args.name}'")
    return 0


def cmd_describe(args, out: Output):
    """Explain one character, or a pair of characters."""
    from huaming import AnnotationComposer, CompatibilityFilter, ToneAnalyzer, Position, get_lexicon
    from huaming.config import config
    from huaming.generators.lexicon import load_templates

    glyphs = args.glyphs
    for glyph in glyphs:
        if len(glyph) != 1:
            out.error(f"'{glyph}' is not a single character")
            return 1

    cfg = config()
    lexicon = get_lexicon(cfg.lexicon_dir)
    composer = AnnotationComposer(lexicon, load_templates(cfg.lexicon_dir))

    if len(glyphs) == 1:
        entry = lexicon.resolve(glyphs[0])
        out.print(composer.describe_character(entry))
        annotation = lexicon.annotation(glyphs[0])
        if annotation.combinations:
            out.print(f"Classic combinations: {', '.join(annotation.combinations)}")
        return 0

    first = lexicon.resolve(glyphs[0], Position.FIRST)
    second = lexicon.resolve(glyphs[1], Position.LAST)
    description = composer.describe_pair(first, second)
    tone_info = ToneAnalyzer(lexicon).analyze(first, second)
    allowed = CompatibilityFilter(lexicon).is_allowed(first.glyph, second.glyph)

    out.print(description.meaning)
    out.print(description.cultural_context)
    out.print(f"Tones: {tone_info.pattern} ({tone_info.harmony})")
    if not allowed:
        out.print(f"Warning: {first.glyph}{second.glyph} is an inauspicious combination")
    return 0 if allowed else 2


def cmd_lexicon(args, out: Output):
    """Browse the character knowledge base."""
    from huaming import Gender, Position, get_lexicon
    from huaming.config import config

    lexicon = get_lexicon(config().lexicon_dir)

    if args.fragment:
        matches = lexicon.transliterations(args.fragment)
        if not matches:
            out.print(f"No transliterations for '{args.fragment}'")
            return 0
        rows = [[glyph, lexicon.reading(glyph) or '-', lexicon.annotation(glyph).meaning or '-']
                for glyph in matches]
        out.table(['Glyph', 'Reading', 'Meaning'], rows, title=f"Transliterations of '{args.fragment}'")
        return 0

    if args.position or args.gender:
        position = Position(args.position or 'first')
        gender = Gender.coerce(args.gender or 'neutral')
        rows = [
            [entry.glyph, entry.reading or '-', entry.meaning or '-', entry.usage or '-']
            for entry in lexicon.pool(position, gender)
        ]
        out.table(['Glyph', 'Reading', 'Meaning', 'Usage'], rows,
                  title=f"{position.value} / {gender.value}")
        return 0

    stats = lexicon.stats()
    rows = [[key, value] for key, value in stats.items() if key != 'pools']
    rows += [[f"pool {key}", value] for key, value in sorted(stats['pools'].items())]
    out.table(['Table', 'Entries'], rows, title="Lexicon")
    return 0


# =============================================================================
# Main
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    from huaming.config import gender_choices

    parser = argparse.ArgumentParser(
        prog='huaming',
        description='HuaMing - Chinese name suggestions for Latin-script names',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s translate "Emily" --gender feminine
  %(prog)s translate "John" -g masculine --seed 7 --json
  %(prog)s segment "Christopher"
  %(prog)s describe 雅 琳
  %(prog)s lexicon --fragment jo
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- translate ---
    p = subparsers.add_parser('translate', aliases=['t'], help='Suggest Chinese names')
    p.add_argument('name', help='Latin-script name')
    p.add_argument('--gender', '-g', choices=gender_choices(), help='Gender profile (default: neutral)')
    p.add_argument('--seed', type=int, help='Seed for reproducible suggestions')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')
    p.add_argument('--verbose', '-v', action='store_true', help='Show full explanations')

    # --- segment ---
    p = subparsers.add_parser('segment', aliases=['seg'], help='Show phonetic tokens of a name')
    p.add_argument('name', help='Latin-script name')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- describe ---
    p = subparsers.add_parser('describe', aliases=['d'], help='Explain one or two characters')
    p.add_argument('glyphs', nargs='+', metavar='GLYPH', help='One or two Chinese characters')

    # --- lexicon ---
    p = subparsers.add_parser('lexicon', aliases=['lex'], help='Browse the knowledge base')
    p.add_argument('--position', '-p', choices=['first', 'middle', 'last'], help='Pool position')
    p.add_argument('--gender', '-g', choices=['masculine', 'feminine', 'neutral'], help='Pool gender')
    p.add_argument('--fragment', '-f', help='Show transliterations of a Latin fragment')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.command in ('describe', 'd') and len(args.glyphs) > 2:
        parser.error("describe takes one or two characters")

    # Handle aliases
    cmd_map = {
        't': 'translate',
        'seg': 'segment',
        'd': 'describe',
        'lex': 'lexicon',
    }
    command = cmd_map.get(args.command, args.command)

    # Output handler
    out = Output(quiet=getattr(args, 'quiet', False))

    # Dispatch
    commands = {
        'translate': cmd_translate,
        'segment': cmd_segment,
        'describe': cmd_describe,
        'lexicon': cmd_lexicon,
    }

    handler = commands.get(command)
    if handler:
        try:
            # Reads .env config, which can itself be malformed
            configure_logging(getattr(args, 'verbose', False))
            return handler(args, out)
        except KeyboardInterrupt:
            out.print("\nCancelled.")
            return 130
        except Exception as e:
            logger.debug("Command failed", exc_info=True)
            out.error(str(e))
            return 1

    parser.print_help()
    return 0


if __name__ == '__main__':
    sys.exit(main())

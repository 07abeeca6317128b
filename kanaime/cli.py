"""
Command line interface for kanaime.

Usage:
    kanaime convert kon'nichiha
    kanaime convert -k ko-hi-
    kanaime suggest -d SKK-JISYO.L きょうのかんじ
    kanaime commit --learning-db learn.db かんじ 幹事
    kanaime stats -d SKK-JISYO.L
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from kanaime import __version__
from kanaime.conn import load_learning, save_learning
from kanaime.deromanize import KanaMode, convert
from kanaime.service import SuggestionService
from kanaime.settings import DEBUG, DICT_PATH, MAX_SUGGESTIONS, SKK_JISYO_URL


def setup_logging(verbose: bool = False):
    """Configure root logging for command line use."""
    level = logging.DEBUG if (verbose or DEBUG) else logging.WARNING
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')


def _add_common(parser: argparse.ArgumentParser):
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging',
    )


def _open_service(dict_path: Optional[str], learning_db: Optional[str]) -> Optional[SuggestionService]:
    """Build and initialize a service, printing the failure if any."""
    store = load_learning(learning_db) if learning_db else None
    service = SuggestionService(store=store)
    report = service.initialize(Path(dict_path or DICT_PATH))
    
    if not report.ready:
        error = report.error
        print(f'Error loading dictionary: {error.message if error else "unknown error"}', file=sys.stderr)
        if error and error.cause == 'not_found':
            print(f'Download a dictionary from {SKK_JISYO_URL} or pass -d PATH.', file=sys.stderr)
        return None
    return service


# ============================================================================
# Subcommands
# ============================================================================

def main_convert(args: list) -> int:
    """Convert romaji to kana."""
    parser = argparse.ArgumentParser(
        prog='kanaime convert',
        description='Convert romaji to hiragana or katakana',
    )
    parser.add_argument('text', nargs='+', help='Romaji text')
    parser.add_argument(
        '-k', '--katakana',
        action='store_true',
        help='Output katakana instead of hiragana',
    )
    _add_common(parser)
    parsed = parser.parse_args(args)
    setup_logging(parsed.verbose)
    
    mode = KanaMode.KATAKANA if parsed.katakana else KanaMode.HIRAGANA
    print(convert(' '.join(parsed.text), mode))
    return 0


def main_suggest(args: list) -> int:
    """Suggest kanji candidates for the trailing reading of some text."""
    parser = argparse.ArgumentParser(
        prog='kanaime suggest',
        description='Suggest kanji for a reading',
    )
    parser.add_argument('text', nargs='*', help='Text whose trailing kana is the reading')
    parser.add_argument('-r', '--reading', default=None, help='Explicit hiragana reading')
    parser.add_argument('-d', '--dictionary', default=None, metavar='PATH', help='Dictionary file')
    parser.add_argument(
        '-n', '--limit',
        type=int,
        default=MAX_SUGGESTIONS,
        metavar='N',
        help=f'Maximum number of candidates (default: {MAX_SUGGESTIONS})',
    )
    parser.add_argument('--learning-db', default=None, metavar='PATH', help='Saved learning counts')
    parser.add_argument('--json', action='store_true', help='Print the result as JSON')
    _add_common(parser)
    parsed = parser.parse_args(args)
    setup_logging(parsed.verbose)
    
    text = ' '.join(parsed.text)
    if not text and not parsed.reading:
        parser.print_usage(sys.stderr)
        return 1
    
    service = _open_service(parsed.dictionary, parsed.learning_db)
    if service is None:
        return 1
    service.max_suggestions = max(parsed.limit, 0)
    
    result = service.suggest(text=text or None, reading=parsed.reading)
    if parsed.json:
        print(result.model_dump_json())
    else:
        for candidate in result.candidates:
            print(candidate)
    return 0


def main_commit(args: list) -> int:
    """Record a committed candidate in the learning database."""
    parser = argparse.ArgumentParser(
        prog='kanaime commit',
        description='Record that a candidate was chosen for a reading',
    )
    parser.add_argument('reading', help='Hiragana reading')
    parser.add_argument('candidate', help='Chosen candidate')
    parser.add_argument('--learning-db', default=None, metavar='PATH', help='Learning database file')
    _add_common(parser)
    parsed = parser.parse_args(args)
    setup_logging(parsed.verbose)
    
    store = load_learning(parsed.learning_db)
    service = SuggestionService(store=store)
    service.commit(parsed.reading, parsed.candidate)
    save_learning(store, parsed.learning_db)
    
    print(f'{parsed.reading}|{parsed.candidate} {store.count(parsed.reading, parsed.candidate)}')
    return 0


def main_stats(args: list) -> int:
    """Print dictionary statistics."""
    parser = argparse.ArgumentParser(
        prog='kanaime stats',
        description='Load a dictionary and report its size',
    )
    parser.add_argument('-d', '--dictionary', default=None, metavar='PATH', help='Dictionary file')
    parser.add_argument('--json', action='store_true', help='Print the report as JSON')
    _add_common(parser)
    parsed = parser.parse_args(args)
    setup_logging(parsed.verbose)
    
    service = SuggestionService()
    report = service.initialize(Path(parsed.dictionary or DICT_PATH))
    
    if parsed.json:
        print(report.model_dump_json())
        return 0 if report.ready else 1
    if not report.ready:
        print(f'Error loading dictionary: {report.error.message}', file=sys.stderr)
        return 1
    
    candidates = sum(len(c) for c in service.dictionary.values())
    print(f'entries: {report.entries}')
    print(f'candidates: {candidates}')
    return 0


SUBCOMMANDS = {
    'convert': main_convert,
    'suggest': main_suggest,
    'commit': main_commit,
    'stats': main_stats,
}


def main(args: Optional[list] = None) -> int:
    """Main CLI entry point."""
    args_list = args if args is not None else sys.argv[1:]
    
    if args_list and args_list[0] in SUBCOMMANDS:
        return SUBCOMMANDS[args_list[0]](args_list[1:])
    
    parser = argparse.ArgumentParser(
        description='Command line interface for kanaime (romaji to kana and kanji suggestions)',
        prog='kanaime',
        epilog=(
            'Subcommands:\n'
            '  kanaime convert    Convert romaji to kana\n'
            '  kanaime suggest    Suggest kanji for a reading\n'
            '  kanaime commit     Record a chosen candidate\n'
            '  kanaime stats      Report dictionary size'
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        '--version',
        action='store_true',
        help='Show version information',
    )
    
    parsed, _ = parser.parse_known_args(args_list)
    
    if parsed.version:
        print(f'kanaime {__version__}')
        return 0
    
    parser.print_help()
    return 1


if __name__ == '__main__':
    sys.exit(main())

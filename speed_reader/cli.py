"""Command-line interface for the Speed Reader.

WHY: The reader core is host-agnostic. A terminal host makes it usable
without a desktop app: flash an article in the terminal, or print the
per-word schedule to check how a text will be paced.

HOW: Uses argparse to pick a text source (file, stdin, clipboard, the
built-in sample, a recent text, or the last interrupted session), a
reading speed (explicit --wpm, a named --preset, or the persisted
setting), a punctuation preset, and the tokenizer mode.
Builds a SpeedReader, then either plays the words in place on one
terminal line or prints a tab-separated schedule. Status messages go to
stderr; words and schedules go to stdout.

RULES:
- Exactly one text source: input_file ("-" for stdin), --clipboard, --sample,
  --recent N or --resume
- Every loaded text joins the recent list kept next to the settings file
- WPM precedence: --wpm, then --preset, then the resumed session, then the
  settings file
- Inter-word delay: --delay, then the settings file
- --save writes the chosen WPM and delay back to the settings file
- --show-config prints the settings path and raw content, then exits
- User errors print "Error: ..." to stderr and exit 1
- --start must be a non-negative word index
- Ctrl-C during playback saves a resumable position and exits 130
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

from speed_reader.config import DEFAULT_PUNCTUATION_PRESET, STATE_FILENAME
from speed_reader.core.ir import TokenizerMode
from speed_reader.core.presets import PunctuationPreset, SpeedPreset, SpeedZone
from speed_reader.core.session import ReadingSession
from speed_reader.reader import SpeedReader
from speed_reader.settings import SettingsStore, StateStore

SAMPLE_TEXT = """\
Speed reading is a collection of methods for increasing reading speed without \
substantially reducing comprehension. The most common techniques include \
minimizing subvocalization, using a pointer or pacer, and expanding peripheral \
vision to take in more words at once.

Research suggests that average reading speed is around 200-250 words per \
minute, while trained speed readers can achieve 400-700 words per minute with \
good comprehension. However, claims of reading thousands of words per minute \
typically come with significant comprehension trade-offs.

The key to effective speed reading is finding the optimal balance between speed \
and understanding for your specific purpose. For casual reading or skimming, \
higher speeds work well. For complex material requiring deep understanding, \
slower speeds with active engagement produce better results.
"""


def _status(msg: str) -> None:
    """Print a status message to stderr, flushed immediately."""
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _load_input(args: argparse.Namespace, reader: SpeedReader) -> None:
    """Load the selected text source into the reader, or exit on error.

    RULES:
    - --clipboard fails when the clipboard is empty or unavailable
    - --recent N is 1-based, as printed by --list-recent
    - --resume fails when there is no saved position younger than 24 hours
    - "-" reads all of stdin
    - A file must exist and decode as UTF-8
    """
    sources = [
        bool(args.input_file),
        args.clipboard,
        args.sample,
        args.recent is not None,
        args.resume,
    ]
    if sum(sources) != 1:
        _fail("Give exactly one text source: a file path, '-', --clipboard, "
              "--sample, --recent N or --resume.")

    if args.clipboard:
        if not reader.load_from_clipboard():
            _fail("The clipboard does not contain any text.")
        return

    if args.sample:
        reader.load_text(SAMPLE_TEXT)
        return

    if args.recent is not None:
        if not reader.load_recent(args.recent - 1):
            _fail("No recent text #{} (see --list-recent).".format(args.recent))
        return

    if args.resume:
        if reader.recover_position() is None:
            _fail("No saved reading position to resume.")
        return

    if args.input_file == "-":
        reader.load_text(sys.stdin.read())
        return

    path = Path(args.input_file)
    if not path.is_file():
        _fail("File not found: {}".format(path))
    try:
        reader.load_text(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        _fail("Could not read {}: {}".format(path, e))


def _list_recent(reader: SpeedReader) -> None:
    """Print the recent texts (1-based) and any resumable position."""
    recents = reader.get_recent_texts()
    for number, recent in enumerate(recents, start=1):
        print("{}\t{} words\t{}".format(number, recent.word_count, recent.title))
    if not recents:
        _status("No recent texts.")
    position = reader.saved_position()
    if position is not None:
        _status("Resumable (--resume): {}".format(position.summary))


def _print_schedule(reader: SpeedReader) -> None:
    """Print index, display time and text for every word from the cursor on."""
    total_ms = 0
    token = reader.get_current_word()
    while token is not None:
        print("{}\t{}\t{}".format(token.index, token.display_time_ms, token.text))
        total_ms += token.display_time_ms
        token = reader.advance()
    _status("Total display time: {:.1f}s".format(total_ms / 1000.0))


def _session_summary(session: ReadingSession) -> str:
    summary = "{} words in {}".format(session.words_read, session.formatted_duration)
    if session.average_wpm:
        summary += " (avg {} WPM)".format(session.average_wpm)
    return summary


def _play(reader: SpeedReader, inter_word_delay_ms: int) -> None:
    """Flash words in place on one terminal line until the end of the text.

    RULES:
    - Ctrl-C saves the position (when past the first word) and exits 130
    - Reaching the end clears any saved position
    """
    session = ReadingSession()
    token = reader.get_current_word()
    try:
        while token is not None:
            sys.stdout.write("\r\033[K{}".format(token.text))
            sys.stdout.flush()
            seconds = (token.display_time_ms + inter_word_delay_ms) / 1000.0
            time.sleep(seconds)
            session.record_word(seconds)
            token = reader.advance()
    except KeyboardInterrupt:
        current = reader.get_current_word()
        position = current.index + 1 if current is not None else 0
        sys.stdout.write("\n")
        _status("Stopped at word {}/{}. Read {}.".format(
            position, reader.get_word_count(), _session_summary(session)
        ))
        saved = reader.save_position()
        if saved is not None:
            _status("Saved position: {}. Continue with --resume.".format(saved.summary))
        sys.exit(130)
    sys.stdout.write("\n")
    reader.clear_saved_position()
    _status("Done. Read {}.".format(_session_summary(session)))
    if session.should_suggest_break:
        _status("You have been reading for over 20 minutes. Consider a short break.")


def _show_config(store: SettingsStore) -> None:
    print("Settings file: {}".format(store.config_path()))
    raw = store.read_raw()
    print(raw if raw is not None else "(no settings file; defaults in use)")


def _run(args: argparse.Namespace) -> None:
    store = SettingsStore(args.config)

    if args.show_config:
        _show_config(store)
        return

    state = StateStore(store.config_path().with_name(STATE_FILENAME))
    punctuation = PunctuationPreset(args.punctuation)
    mode = TokenizerMode.SIMPLE if args.simple else TokenizerMode.RICH
    reader = SpeedReader(mode=mode, state=state)

    if args.list_recent:
        _list_recent(reader)
        return

    if args.start < 0:
        _fail("Start index must not be negative, got {}.".format(args.start))

    settings = store.load()
    _load_input(args, reader)
    if reader.get_word_count() == 0:
        _fail("No words to read.")

    if args.wpm is not None:
        wpm = args.wpm
    elif args.preset is not None:
        wpm = SpeedPreset[args.preset.upper()].value
    elif args.resume:
        wpm = reader.get_config().wpm
    else:
        wpm = settings.playback.wpm
    if wpm <= 0:
        _fail("WPM must be positive, got {}.".format(wpm))

    delay_ms = args.delay if args.delay is not None else settings.playback.inter_word_delay_ms
    if delay_ms < 0:
        _fail("Inter-word delay must not be negative, got {}.".format(delay_ms))

    reader.set_config(punctuation.to_playback_config(wpm))

    if args.start > 0:
        if reader.seek_to(args.start) is None:
            _fail("Start index {} is past the last word ({}).".format(
                args.start, reader.get_word_count() - 1
            ))

    if args.save:
        settings.playback.wpm = wpm
        settings.playback.inter_word_delay_ms = delay_ms
        if store.save(settings):
            _status("Saved settings to {}".format(store.config_path()))
        else:
            _status("Warning: could not save settings to {}".format(store.config_path()))

    zone = SpeedZone.for_wpm(wpm)
    _status("Loaded {} words at {} WPM ({}: {}), punctuation {}, {}".format(
        reader.get_word_count(),
        wpm,
        zone.label,
        zone.description,
        punctuation.label.lower(),
        reader.estimate_time_remaining(),
    ))

    if args.schedule:
        _print_schedule(reader)
    else:
        _play(reader, delay_ms)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() lets tests inspect the
    parser without loading any text.
    """
    parser = argparse.ArgumentParser(
        prog="speed_reader",
        description="Flash text one word at a time (RSVP), pacing each word "
                    "by length, punctuation and complexity.",
    )

    parser.add_argument(
        "input_file",
        nargs="?",
        default=None,
        help="Text file to read, or '-' for stdin.",
    )
    parser.add_argument(
        "--clipboard",
        action="store_true",
        help="Read the text from the system clipboard.",
    )
    parser.add_argument(
        "--sample",
        action="store_true",
        help="Read a built-in sample text.",
    )
    parser.add_argument(
        "--recent",
        type=int,
        default=None,
        metavar="N",
        help="Reopen recent text N (numbered as in --list-recent).",
    )
    parser.add_argument(
        "--resume",
        action="store_true",
        help="Continue where the last interrupted session stopped.",
    )
    parser.add_argument(
        "--list-recent",
        action="store_true",
        help="List recent texts and any resumable position, then exit.",
    )

    speed = parser.add_mutually_exclusive_group()
    speed.add_argument(
        "--wpm",
        type=int,
        default=None,
        help="Reading speed in words per minute (default: saved setting).",
    )
    speed.add_argument(
        "--preset",
        choices=[p.name.lower() for p in SpeedPreset],
        default=None,
        help="Named reading speed.",
    )

    parser.add_argument(
        "--punctuation",
        choices=[p.value for p in PunctuationPreset],
        default=DEFAULT_PUNCTUATION_PRESET
        if DEFAULT_PUNCTUATION_PRESET in {p.value for p in PunctuationPreset}
        else PunctuationPreset.NORMAL.value,
        help="How much punctuation extends display time (default: %(default)s).",
    )
    parser.add_argument(
        "--delay",
        type=int,
        default=None,
        help="Extra pause between words in ms (default: saved setting).",
    )
    parser.add_argument(
        "--simple",
        action="store_true",
        help="Simple timing: flat punctuation pause, no word-type complexity.",
    )
    parser.add_argument(
        "--start",
        type=int,
        default=0,
        help="Word index to start from (default: 0).",
    )
    parser.add_argument(
        "--schedule",
        action="store_true",
        help="Print index, display time (ms) and word for each word instead of playing.",
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Save the chosen WPM and delay to the settings file.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Settings file path (default: platform config directory).",
    )
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Print the settings file path and content, then exit.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug messages to stderr.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m speed_reader``.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    _run(args)


if __name__ == "__main__":
    main()

# play.py
import argparse
import logging
import sys

from rich.console import Console

from alphabet import ALPHABET
from errors import ContradictoryConstraint, WordleError
from game import Assistant, Round, pick_secret
from guesser import Guesser
from session import GameRecord, SessionLog, Stats
from settings import load_settings, setup_logging
from wordlists import WordSets

log = logging.getLogger(__name__)

STYLES = {"G": "bold green", "Y": "bold yellow", "R": "bold red", "X": "dim"}
OPENERS = ["salet", "reast", "crate", "trace", "slate", "crane"]


def ordinal(n):
    return {1: "1st", 2: "2nd", 3: "3rd"}.get(n, f"{n}th")


class Screen:
    """
    Console front end. On a terminal it prints coloured letters; when the
    output is redirected it prints one plain code line per event instead.
    """

    def __init__(self, console):
        self.console = console
        self.tty = console.is_terminal

    def say(self, markup):
        if self.tty:
            self.console.print(markup)

    def plain(self, line):
        if not self.tty:
            self.console.print(line, markup=False, highlight=False)

    def ask(self, prompt):
        try:
            return self.console.input(prompt if self.tty else "").strip()
        except EOFError:
            return None

    def colored(self, letters, codes):
        return "".join(
            f"[{STYLES[c]}]{ch.upper()}[/{STYLES[c]}]" for ch, c in zip(letters, codes)
        )

    def show_guess(self, board, record):
        self.say(self.colored(record.word, record.code))
        self.say(self.colored(ALPHABET, board.letter_codes()))
        self.plain(f"{record.code} {board.letter_codes()}")

    def show_recommendations(self, board, guesser):
        remaining = guesser.candidates(board.model)
        preview = " ".join(w.upper() for w in remaining[:5])
        if len(remaining) > 5:
            preview += " ..."
        self.say("[bold blue]Possibly correct words:[/bold blue]")
        self.say(preview or "(none)")
        ranked = board.recommend(guesser)
        if ranked:
            self.say("[bold blue]I recommend you use:[/bold blue]")
            self.say(", ".join(f"{w.upper()}({bits:.2f} Bits)" for w, bits in ranked))

    def show_stats(self, stats):
        self.say("\n[bold green]Your Stats:[/bold green]")
        self.say(f"Success rate: {stats.success_rate:.2f}\nAverage trying times: {stats.average_guesses:.2f}")
        top = stats.top_words()
        self.say("[bold blue]Frequently used words:[/bold blue]")
        self.say("; ".join(f"{w}: {n}" for w, n in top))
        self.plain(f"{stats.wins} {stats.losses} {stats.average_guesses:.2f}")
        self.plain(" ".join(f"{w.upper()} {n}" for w, n in top))


###############################################################################
# play: a round against a secret
###############################################################################
def play_round(screen, rnd, guesser=None):
    while not rnd.over:
        if guesser is not None and rnd.guesses_used > 0:
            screen.show_recommendations(rnd, guesser)
        prompt = f"[bold blue]Start Guessing({ordinal(rnd.guesses_used + 1)}): [/bold blue]"
        while True:
            word = screen.ask(prompt)
            if word is None:
                return False
            try:
                record = rnd.submit(word)
                break
            except WordleError as exc:
                screen.say(f"[red]{exc}. Input again.[/red]")
                screen.plain("INVALID")
        screen.show_guess(rnd, record)

    if rnd.won:
        screen.say(f"[bold green]CORRECT, guess time: {rnd.guesses_used}[/bold green]")
        screen.plain(f"CORRECT {rnd.guesses_used}")
    else:
        screen.say("[bold red]LOST, you failed too many times.[/bold red]")
        screen.plain(f"FAILED {rnd.secret.upper()}")
    return True


def _secret_for(screen, settings, words, day):
    if settings.random:
        secret = pick_secret(words.final, settings.seed, day)
        screen.say(f"[bold blue]Random key:[/bold blue] [bold green]{secret}[/bold green]")
        return secret
    if settings.word:
        return words.check_secret(settings.word)
    while True:
        secret = screen.ask("[bold blue]Please input your key word: [/bold blue]")
        if secret is None:
            return None
        try:
            return words.check_secret(secret)
        except WordleError as exc:
            screen.say(f"[red]{exc}[/red]")


def run_play(screen, settings, words, guesser):
    session_log = SessionLog(settings.state) if settings.state else None
    stats = Stats.from_records(session_log.read() if session_log else [])
    if settings.hard_mode:
        screen.say("[bold red]Difficult mode: on[/bold red]")

    day = settings.day
    while True:
        secret = _secret_for(screen, settings, words, day)
        if secret is None:
            return 0
        rnd = Round(secret, words, hard_mode=settings.hard_mode)
        finished = play_round(screen, rnd, guesser)
        if not finished:
            return 0

        record = GameRecord.from_round(rnd)
        stats.add(record)
        if session_log is not None:
            session_log.append(record)
        if settings.stats:
            screen.show_stats(stats)

        again = screen.ask("[bold blue]Wanna play another round?(Y/N): [/bold blue]")
        if again is None or again.upper() != "Y":
            return 0
        day += 1


###############################################################################
# assist: feedback from a game played somewhere else
###############################################################################
def run_assist(screen, settings, words, guesser):
    assistant = Assistant(words)
    screen.say("Welcome to wordle solver.")
    screen.say("Pick a word from below and start your game:")
    screen.say(", ".join(w.upper() for w in OPENERS))

    while not assistant.over:
        word = screen.ask("[bold blue]Your guess: [/bold blue]")
        if word is None:
            return 0
        code = screen.ask("[bold blue]Please input the status of the last word: [/bold blue]")
        if code is None:
            return 0
        try:
            record = assistant.observe(word, code)
        except ContradictoryConstraint as exc:
            screen.say(f"[red]That feedback contradicts the earlier rounds: {exc}[/red]")
            screen.plain("CONTRADICTION")
            continue
        except (WordleError, ValueError) as exc:
            screen.say(f"[red]{exc}[/red]")
            screen.plain("INVALID")
            continue
        screen.show_guess(assistant, record)
        if assistant.solved:
            screen.say("[bold green]SUCCESS![/bold green]")
            screen.plain("SUCCESS")
            return 0
        screen.show_recommendations(assistant, guesser)
    return 0


###############################################################################
# Command line
###############################################################################
def build_parser():
    parser = argparse.ArgumentParser(description="Wordle with an entropy-ranked guess helper.")
    parser.add_argument("mode", nargs="?", choices=["play", "assist"], default="play")
    parser.add_argument("-c", "--config", help="YAML config file")
    parser.add_argument("-w", "--word", help="the answer for the round")
    parser.add_argument("-r", "--random", action=argparse.BooleanOptionalAction, default=None,
                        help="pick the answer from the final set")
    parser.add_argument("-D", "--difficult", dest="hard_mode", action=argparse.BooleanOptionalAction,
                        default=None,
                        help="hard mode: confirmed letters must be reused")
    parser.add_argument("-t", "--stats", action=argparse.BooleanOptionalAction, default=None,
                        help="print stats after every round")
    parser.add_argument("-d", "--day", type=int, help="day to start from in random mode")
    parser.add_argument("-s", "--seed", type=int, help="seed for random mode")
    parser.add_argument("-f", "--final-set", help="file with the final word set")
    parser.add_argument("-a", "--acceptable-set", help="file with the acceptable word set")
    parser.add_argument("-S", "--state", help="session log to read and append to")
    parser.add_argument("--recommend", action=argparse.BooleanOptionalAction, default=None,
                        help="show entropy-ranked suggestions while playing")
    parser.add_argument("-k", "--top-k", type=int, help="number of suggestions")
    parser.add_argument("-j", "--workers", type=int, help="processes used for ranking")
    parser.add_argument("--pattern-data", help="precomputed pattern table (.npz)")
    parser.add_argument("--pool", dest="candidate_pool", choices=["acceptable", "final"],
                        help="word set the suggestions are drawn from")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None, console=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    screen = Screen(console or Console())

    try:
        settings = load_settings(args.config).merge(vars(args))
        words = WordSets.load(settings.final_set, settings.acceptable_set)
    except (WordleError, OSError, ValueError) as exc:
        screen.console.print(f"[bold red]{exc}[/bold red]")
        return 1
    log.debug("loaded %d final and %d acceptable words", len(words.final), len(words.acceptable))

    guesser = None
    if settings.recommend or args.mode == "assist":
        guesser = Guesser(
            words,
            top_k=settings.top_k,
            workers=settings.workers,
            pool=settings.candidate_pool,
            pattern_data=settings.pattern_data,
        )

    try:
        if args.mode == "assist":
            return run_assist(screen, settings, words, guesser)
        return run_play(screen, settings, words, guesser)
    except WordleError as exc:
        screen.console.print(f"[bold red]{exc}[/bold red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())

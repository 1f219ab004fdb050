#!/usr/bin/env python3
"""
GOPHER DASH - Terminal Endless Runner
======================================
Jump over holes and rocks while the world scrolls ever faster.

Controls:
    W/SPACE - Jump (restart after a crash)
    Q       - Quit
"""

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional

from blessed import Terminal

from .controls import decode_key
from .events import Effect, Event, Tick, Resize, Quit, ScheduleTick, SaveHighScore, Exit
from .game import GameLoop
from .highscore import load_high_score, save_high_score, score_file_path
from .layout import terminal_size
from .scheduler import Scheduler
from .screen import DoubleBuffer


LOGGER = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Longest wait for input; also bounds how stale a resize can get
MAX_INPUT_WAIT = 0.05


# =============================================================================
# APP
# =============================================================================

class App:
    """Wires the terminal, scheduler and game loop together."""

    def __init__(self, term: Terminal, loop: GameLoop, scheduler: Scheduler,
                 score_path: Path):
        self.term = term
        self.loop = loop
        self.scheduler = scheduler
        self.score_path = score_path
        self.buffer = DoubleBuffer(term)
        self.running = True
        self._size = None

    # Effects -----------------------------------------------------------
    def apply(self, effects: List[Effect]):
        for effect in effects:
            if isinstance(effect, ScheduleTick):
                self.scheduler.schedule(effect.delay, Tick(effect.generation))
            elif isinstance(effect, SaveHighScore):
                save_high_score(self.score_path, effect.score)
            elif isinstance(effect, Exit):
                self.running = False

    def dispatch(self, event: Event):
        self.apply(self.loop.dispatch(event))

    # Inputs ------------------------------------------------------------
    def poll_resize(self):
        """Emit a Resize event when the terminal size changed."""
        size = terminal_size(self.term)
        if size != self._size:
            self._size = size
            self.buffer.invalidate()
            print(self.term.home + self.term.clear, end='', flush=True)
            self.dispatch(Resize(*size))

    def handle_input(self, timeout: float):
        """Wait up to timeout for a key, then drain the input buffer."""
        key = self.term.inkey(timeout=timeout)
        while key and self.running:
            event = decode_key(key)
            if event is not None:
                self.dispatch(event)
            key = self.term.inkey(timeout=0)

    def deliver_ticks(self):
        for event in self.scheduler.pop_due():
            if not self.running:
                break
            self.dispatch(event)

    # Output ------------------------------------------------------------
    def render(self):
        output = self.buffer.present(self.loop.view())
        if output:
            print(output, end='', flush=True)

    # Loop --------------------------------------------------------------
    def step(self):
        """One pass: resize, timers, draw, then wait for input."""
        self.poll_resize()
        self.deliver_ticks()
        if not self.running:
            return
        self.render()

        wait = self.scheduler.time_until_next()
        if wait is None or wait > MAX_INPUT_WAIT:
            wait = MAX_INPUT_WAIT
        self.handle_input(wait)

    def run(self):
        self.poll_resize()
        self.apply(self.loop.start())
        while self.running:
            try:
                self.step()
            except KeyboardInterrupt:
                self.dispatch(Quit())


# =============================================================================
# ENTRY POINT
# =============================================================================

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='gopher-dash',
        description='Endless runner for the terminal.',
    )
    parser.add_argument(
        '--score-file',
        type=Path,
        default=None,
        help='High score file (default: .gopherdash_highscore in the current directory).',
    )
    parser.add_argument('--seed', type=int, default=None, help='Seed for obstacle spawning.')
    parser.add_argument(
        '--log-file',
        default=None,
        help='Write logs to this file. The terminal is owned by the game, so logs are dropped otherwise.',
    )
    parser.add_argument(
        '--log-level',
        default='INFO',
        help='Logging level (e.g. DEBUG, INFO, WARNING).',
    )
    return parser.parse_args(argv)


def configure_logging(log_file: Optional[str], level_name: str):
    level = getattr(logging, level_name.upper(), logging.INFO)
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=level,
            format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        )
    else:
        logging.getLogger().addHandler(logging.NullHandler())


def main(argv: Optional[List[str]] = None):
    """Entry point. Sets up the terminal and runs until Quit."""
    args = parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    score_path = args.score_file or score_file_path()
    high_score = load_high_score(score_path)
    LOGGER.info('Loaded high score %d from %s', high_score, score_path)

    term = Terminal()
    if not term.is_a_tty:
        print('gopher-dash needs an interactive terminal.', file=sys.stderr)
        sys.exit(1)

    scheduler = Scheduler()
    loop = GameLoop(high_score, rng=random.Random(args.seed), clock=scheduler.now)

    with term.fullscreen(), term.cbreak(), term.hidden_cursor():
        app = App(term, loop, scheduler, score_path)
        app.run()
        # Restore terminal
        print(term.normal, end='', flush=True)

    LOGGER.info('Exiting')


if __name__ == '__main__':
    main()

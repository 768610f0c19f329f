# main.py
import argparse
import logging
from typing import Optional, Sequence

import pygame # type: ignore

from autopilot.env import Autopilot
from autopilot.policies import POLICIES

from .adapters import FileStorage, FrameScheduler
from .config import WIDTH, HEIGHT, GAME_SPEEDS, TEXT, Config
from .controls import handle_events
from .engine import GameEngine
from .game import GameState, GameStatus
from .surface import PygameCanvas

logger = logging.getLogger(__name__)

DEFAULT_SCORES = "~/.arcadesnake.json"


def draw_hud(screen: pygame.Surface, font: pygame.font.Font, state: GameState) -> None:
    txt = font.render(
        f"Score: {state.score}   Level: {state.level}   Best: {state.high_score}", True, TEXT
    )
    screen.blit(txt, (8, 6))
    if state.status is GameStatus.IDLE:
        hint = font.render("Press SPACE to start", True, TEXT)
        screen.blit(hint, hint.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2)))
    elif state.status is GameStatus.PAUSED:
        hint = font.render("Paused - SPACE to resume", True, TEXT)
        screen.blit(hint, hint.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2)))


def draw_game_over(screen: pygame.Surface, font: pygame.font.Font, score: int) -> None:
    width, height = screen.get_size()
    # Dim with translucent overlay
    overlay = pygame.Surface((width, height), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, 140))  # RGBA
    screen.blit(overlay, (0, 0))

    title = font.render("GAME OVER", True, (240, 240, 250))
    sub   = font.render("Press R to restart", True, (220, 220, 230))
    sco   = font.render(f"Score: {score}", True, (220, 220, 230))

    screen.blit(title, title.get_rect(center=(width // 2, height // 2 - 16)))
    screen.blit(sub, sub.get_rect(center=(width // 2, height // 2 + 16)))
    screen.blit(sco, sco.get_rect(center=(width // 2, height // 2 + 44)))


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play snake.")
    parser.add_argument("--difficulty", choices=sorted(GAME_SPEEDS), default=None)
    parser.add_argument("--width", type=int, default=WIDTH, help="window width in pixels")
    parser.add_argument("--height", type=int, default=HEIGHT, help="window height in pixels")
    parser.add_argument("--cell-size", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--scores", type=str, default=DEFAULT_SCORES,
                        help="JSON file holding the high score")
    parser.add_argument("--autopilot", choices=sorted(POLICIES), default=None,
                        help="let a policy steer")
    parser.add_argument("--log-level", type=str, default="WARNING")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    cfg = Config.from_env(seed=args.seed, difficulty=args.difficulty, cell_size=args.cell_size)

    pygame.init()
    font = pygame.font.SysFont(None, 24)
    screen = pygame.display.set_mode((args.width, args.height))
    pygame.display.set_caption("Snake")
    clock = pygame.time.Clock()

    scheduler = FrameScheduler()
    engine = GameEngine(
        PygameCanvas(screen),
        on_game_over=lambda score: logger.info("Game over with score %d", score),
        scheduler=scheduler,
        storage=FileStorage(args.scores),
        clock=pygame.time.get_ticks,
        config=cfg,
    )

    pilot = None
    if args.autopilot:
        pilot = Autopilot(engine, POLICIES[args.autopilot])

    running = True
    while running:
        # 1) input
        running = handle_events(engine, pygame.event.get())
        if not running:
            break
        if pilot is not None:
            pilot.steer()

        # 2) update (movement gated inside the engine)
        scheduler.run_pending(pygame.time.get_ticks())

        # 3) render
        state = engine.get_game_state()
        engine.render()
        draw_hud(screen, font, state)
        if state.status is GameStatus.GAME_OVER:
            draw_game_over(screen, font, state.score)
        pygame.display.flip()
        clock.tick(60)

    pygame.quit()


if __name__ == "__main__":
    main()

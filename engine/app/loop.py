from __future__ import annotations
import logging
import pygame

from engine.api.config import EngineConfig
from engine.api.frame_data import FrameData
from engine.app.context import Context
from engine.app.loader import load_game_manifest, load_game_module, resolve_game_root

log = logging.getLogger(__name__)


def run_game(
    game_id: str,
    screen_size: tuple[int, int],
    fps: int = 60,
    debug: bool = False,
):
    # load game first so a broken manifest fails before a window opens
    game_root = resolve_game_root(game_id)
    manifest = load_game_manifest(game_root)
    module = load_game_module(game_root)
    game = module.get_game()

    caption = manifest.get("name", game_id)
    cfg = EngineConfig(
        screen_size=screen_size,
        fps=fps,
        caption=caption,
        debug=debug,
    )

    pygame.init()
    pygame.display.set_caption(cfg.caption)
    screen = pygame.display.set_mode(screen_size)
    clock = pygame.time.Clock()

    ctx = Context(
        screen=screen,
        clock=clock,
        cfg=cfg,
        game_id=game_root.name,
        screen_size=screen_size,
    )

    game.on_load(ctx, manifest)
    log.info("Running %s at %dx%d, %d fps", caption, screen_size[0], screen_size[1], fps)

    running = True
    frame_index = 0
    try:
        while running:
            dt = clock.tick(cfg.fps)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                    continue
                consumed = game.on_event(event)
                if consumed:
                    continue
                if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False

            frame_index += 1
            frame_data = FrameData(timestamp_ms=ctx.ticks(),
                                   frame_index=frame_index)

            screen.fill((12, 14, 18))
            game.on_update(dt, frame_data)
            game.on_draw(screen)
            pygame.draw.rect(screen, (220, 220, 220),
                             (8, 8, screen_size[0] - 16, screen_size[1] - 16), 1)
            if cfg.debug:
                pygame.display.set_caption(f"{cfg.caption} ({clock.get_fps():.0f} fps)")

            pygame.display.flip()

    finally:
        game.on_unload()
        pygame.quit()

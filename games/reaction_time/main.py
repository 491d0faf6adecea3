from __future__ import annotations
import logging
import pygame
from typing import Optional

from engine.api import Game, FrameData
from engine.app.context import Context
from engine.render.shapes import draw_text, draw_text_centered, draw_button

from .const import *
from .controller import ReactionController, ReactionOptions
from .session import Phase

log = logging.getLogger(__name__)


class ReactionTime(Game):
    def __init__(self, rng=None):
        self.rng = rng

    def on_load(self, ctx: Context, manifest):
        self.ctx = ctx
        self.manifest = manifest
        self.now = ctx.ticks
        self.w, self.h = ctx.screen_size
        self.mid_x = self.w // 2

        self.controller = ReactionController(
            options=ReactionOptions.from_manifest(manifest), rng=self.rng)
        self.prompt_text: str = ""

        btn_x = (self.w - START_BUTTON_W) // 2
        btn_y = self.h - START_BUTTON_H - EDGE_MARGIN
        self.start_rect = pygame.Rect(btn_x, btn_y, START_BUTTON_W, START_BUTTON_H)

    # ---------- Helpers ----------
    @property
    def start_enabled(self) -> bool:
        return not self.controller.awaiting_player_id

    def _request_start(self):
        if not self.start_enabled:
            return
        self.prompt_text = ""
        self.controller.on_start_requested(self.now())

    def _handle_prompt_key(self, event: pygame.event.Event) -> None:
        if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            entry = self.controller.submit_player_id(self.prompt_text)
            if entry is None:
                log.debug("Score not recorded (blank id)")
            self.prompt_text = ""
        elif event.key == pygame.K_ESCAPE:
            self.controller.skip_player_id()
            self.prompt_text = ""
        elif event.key == pygame.K_BACKSPACE:
            self.prompt_text = self.prompt_text[:-1]
        elif event.unicode and event.unicode.isprintable():
            if len(self.prompt_text) < PROMPT_MAX_CHARS:
                self.prompt_text += event.unicode

    # ---------- Update ----------
    def on_update(self, dt_ms: float, frame: FrameData) -> None:
        self.controller.on_tick(frame.timestamp_ms)

    # ---------- Events ----------
    def on_event(self, event: pygame.event.Event) -> Optional[bool]:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.start_rect.collidepoint(event.pos):
                self._request_start()
                return True
            return False

        if event.type != pygame.KEYDOWN:
            return False

        if self.controller.awaiting_player_id:
            self._handle_prompt_key(event)
            return True

        if event.key in (pygame.K_SPACE, pygame.K_RETURN, pygame.K_KP_ENTER):
            self._request_start()
            return True

        if event.unicode:
            return self.controller.on_key_input(event.unicode, self.now())
        return False

    # ---------- Draw ----------
    def on_draw(self, surface: pygame.Surface) -> None:
        c = self.controller
        surface.fill(BG_COLOR)

        draw_text_centered(surface, c.instruction, (self.mid_x, EDGE_MARGIN + 24),
                           TEXT_COLOR, size=INSTRUCTION_FONT)

        if c.phase == Phase.Active:
            draw_text_centered(surface, c.target_symbol, (self.mid_x, self.h // 3),
                               TARGET_COLOR, size=TARGET_FONT)
        elif c.phase == Phase.Finished:
            draw_text_centered(surface, CHECK_MARK, (self.mid_x, self.h // 3),
                               DONE_COLOR, size=TARGET_FONT)

        timer_color = DONE_COLOR if c.phase == Phase.Finished else TIMER_RUNNING_COLOR
        draw_text_centered(surface, c.elapsed_display, (self.mid_x, self.h // 2 + 30),
                           timer_color, size=TIMER_FONT)

        if c.result_message:
            draw_text_centered(surface, c.result_message, (self.mid_x, self.h // 2 + 68),
                               TEXT_COLOR, size=RESULT_FONT)

        self._draw_ranking(surface)
        draw_button(surface, self.start_rect, "START", BUTTON_COLOR, enabled=self.start_enabled)

        if c.awaiting_player_id:
            self._draw_prompt(surface)

    def _draw_ranking(self, surface):
        y = self.h // 2 + 92
        for line in self.controller.ranking_lines:
            draw_text(surface, line, (EDGE_MARGIN, y), TEXT_COLOR, size=RANKING_FONT)
            y += 18

    def _draw_prompt(self, surface):
        box = pygame.Rect(EDGE_MARGIN * 2, self.h // 3 - 60, self.w - EDGE_MARGIN * 4, 120)
        pygame.draw.rect(surface, PROMPT_BG_COLOR, box)
        pygame.draw.rect(surface, BUTTON_COLOR, box, width=2)
        draw_text_centered(surface, f"Enter the first {self.controller.options.player_id_length} letters of your name:",
                           (box.centerx, box.y + 24), TEXT_COLOR, size=RESULT_FONT)
        draw_text_centered(surface, self.prompt_text + "_", (box.centerx, box.y + 62),
                           TARGET_COLOR, size=TIMER_FONT)
        draw_text_centered(surface, "ENTER to save, ESC to skip",
                           (box.centerx, box.bottom - 16), TEXT_COLOR, size=18)

    def on_unload(self) -> None:
        pass


def get_game():
    return ReactionTime()

from __future__ import annotations

import math
from collections.abc import Sequence

import pygame  # type: ignore[import-not-found]

from memorygame.engine.actions import RestartAction, SelectCardAction, SetMatchesAction
from memorygame.engine.session import GameSession, step
from memorygame.engine.types import Card, SoundCue

from ..app import GameContext
from ..card_sprite import CardSprite
from ..scene_base import SceneTransition, request_quit
from ..ui import Button, Slider, draw_text, draw_text_centered

CARD_ASPECT = 0.72
CARD_GAP = 14
TOP_BAR = 120


def grid_shape(count: int) -> tuple[int, int]:
    cols = max(1, math.ceil(math.sqrt(count)))
    rows = max(1, math.ceil(count / cols))
    return cols, rows


class MemoryScene:
    """The game screen. Also acts as the session's presenter."""

    def __init__(self, ctx: GameContext) -> None:
        assert ctx.variants is not None and ctx.config is not None
        self.ctx = ctx
        self._sprites: dict[int, CardSprite] = {}
        self._game_over_guesses: int | None = None
        self._message = ""

        cfg = ctx.config
        w, _h = ctx.screen.get_size()
        self._matches_value = cfg.cards_to_spawn // 2
        self.slider = Slider(
            rect=pygame.Rect(w - 380, 72, 220, 20),
            min_value=cfg.min_cards // 2,
            max_value=cfg.max_cards // 2,
            value=self._matches_value,
            on_change=self._on_matches_changed,
        )
        self.btn_restart = Button(rect=pygame.Rect(w - 140, 30, 110, 40), text="Restart", on_click=self._on_restart)
        self.btn_quit = Button(rect=pygame.Rect(w - 140, 76, 110, 34), text="Quit", on_click=request_quit)
        self.btn_play_again = Button(
            rect=pygame.Rect(w // 2 - 130, 430, 260, 56),
            text="Play Again",
            on_click=self._on_restart,
            visible=False,
        )

        self.session = GameSession(ctx.variants, config=cfg, seed=ctx.seed, presenter=self)
        if ctx.matches_override is not None:
            self.session.set_num_cards_to_spawn(ctx.matches_override)
        self.session.start()
        self.ctx.telemetry.log_session("session_started", self.session)

    # -- presenter -----------------------------------------------------

    def cards_spawned(self, cards: Sequence[Card]) -> None:
        assert self.ctx.variants is not None
        rects = self._layout(len(cards))
        self._sprites = {}
        for card, rect in zip(cards, rects):
            variant = self.ctx.variants.get(card.variant)
            self._sprites[card.id] = CardSprite(
                card=card,
                rect=rect,
                face=self.ctx.assets.card_face(variant, rect.size),
                back=self.ctx.assets.card_back(rect.size),
            )

    def cards_destroyed(self, cards: Sequence[Card]) -> None:
        for card in cards:
            self._sprites.pop(card.id, None)

    def flip_card(self, card: Card) -> None:
        sprite = self._sprites.get(card.id)
        if sprite is not None:
            sprite.flip()

    def unflip_card(self, card: Card) -> None:
        sprite = self._sprites.get(card.id)
        if sprite is not None:
            sprite.unflip()

    def set_interactable(self, card: Card, value: bool) -> None:
        sprite = self._sprites.get(card.id)
        if sprite is not None:
            sprite.interactable = value

    def play_sound(self, cue: SoundCue) -> None:
        self.ctx.assets.play_sound(cue)

    def show_game_over(self, guesses: int) -> None:
        self._game_over_guesses = guesses
        self.btn_play_again.visible = True
        self.ctx.telemetry.log_session("game_over", self.session)

    def hide_game_over(self) -> None:
        self._game_over_guesses = None
        self.btn_play_again.visible = False

    def set_matches(self, matches: int) -> None:
        self._matches_value = matches
        self.slider.set_value(matches)

    # -- layout --------------------------------------------------------

    def _layout(self, count: int) -> list[pygame.Rect]:
        sw, sh = self.ctx.screen.get_size()
        area = pygame.Rect(40, TOP_BAR + 10, sw - 80, sh - TOP_BAR - 40)
        cols, rows = grid_shape(count)
        max_w = (area.width - CARD_GAP * (cols - 1)) / cols
        max_h = (area.height - CARD_GAP * (rows - 1)) / rows
        card_w = int(min(max_w, max_h * CARD_ASPECT))
        card_h = int(card_w / CARD_ASPECT)

        grid_w = cols * card_w + (cols - 1) * CARD_GAP
        grid_h = rows * card_h + (rows - 1) * CARD_GAP
        x0 = area.x + (area.width - grid_w) // 2
        y0 = area.y + (area.height - grid_h) // 2

        rects: list[pygame.Rect] = []
        for i in range(count):
            r, c = divmod(i, cols)
            rects.append(pygame.Rect(x0 + c * (card_w + CARD_GAP), y0 + r * (card_h + CARD_GAP), card_w, card_h))
        return rects

    # -- input ---------------------------------------------------------

    def _on_restart(self) -> None:
        self.ctx.telemetry.log_session("restart", self.session)
        self._message = ""
        step(self.session, RestartAction())

    def _on_matches_changed(self, matches: int) -> None:
        res = step(self.session, SetMatchesAction(matches=matches))
        self._message = "" if res.ok else (res.error or "")

    def _hit_test_card(self, pos: tuple[int, int]) -> CardSprite | None:
        for sprite in self._sprites.values():
            if sprite.rect.collidepoint(pos):
                return sprite
        return None

    def handle_event(self, event: pygame.event.Event) -> None:
        if self.btn_play_again.handle_event(event):
            return
        if self.btn_restart.handle_event(event) or self.btn_quit.handle_event(event):
            return
        if self.slider.handle_event(event):
            return

        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_r:
                self._on_restart()
            elif event.key == pygame.K_ESCAPE:
                request_quit()
            return

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self._game_over_guesses is not None:
                return
            sprite = self._hit_test_card(event.pos)
            if sprite is None or not sprite.interactable:
                return
            step(self.session, SelectCardAction(card_id=sprite.card.id))

    def update(self, dt: float) -> SceneTransition | None:
        self.session.tick(dt)
        for sprite in self._sprites.values():
            sprite.update(dt)
        return None

    # -- drawing -------------------------------------------------------

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((16, 40, 32))
        fonts = self.ctx.assets.fonts
        s = self.session

        draw_text(screen, fonts.big, "Memory", (40, 24))
        draw_text(screen, fonts.ui, f"Guesses: {s.guess_count}", (40, 76))
        draw_text(screen, fonts.ui, f"Matches: {s.correct_count}/{s.total_matches}", (180, 76))

        draw_text(screen, fonts.ui, f"New Number of Matches: {self._matches_value}", (self.slider.rect.x, 36))
        self.slider.draw(screen)
        self.btn_restart.draw(screen, fonts.ui)
        self.btn_quit.draw(screen, fonts.ui)
        if self._message:
            draw_text(screen, fonts.small, self._message, (self.slider.rect.x, 100), color=(240, 200, 120))

        mouse = pygame.mouse.get_pos()
        for sprite in self._sprites.values():
            sprite.render(screen, hovered=sprite.rect.collidepoint(mouse))

        if self._game_over_guesses is not None:
            self._draw_game_over(screen)

    def _draw_game_over(self, screen: pygame.Surface) -> None:
        overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 170))
        screen.blit(overlay, (0, 0))

        w, _h = screen.get_size()
        fonts = self.ctx.assets.fonts
        draw_text_centered(screen, fonts.big, "Game Over", (w // 2, 320))
        draw_text_centered(screen, fonts.ui, f"Guesses: {self._game_over_guesses}", (w // 2, 380))
        self.btn_play_again.draw(screen, fonts.ui)

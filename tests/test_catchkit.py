"""Tests for the pygame front end."""

import pygame
import pytest

import catchkit
from catchgame import ScreenState


def key(code):
    return pygame.event.Event(pygame.KEYDOWN, key=code)


def click(pos, button=1):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=pos, button=button)


class TestHandleEvent:
    """Test input routing."""

    def test_quit(self, game):
        assert catchkit.handle_event(game, pygame.event.Event(pygame.QUIT)) is False

    def test_arrows_move_basket(self, game):
        assert catchkit.handle_event(game, key(pygame.K_LEFT)) is True
        assert game.basket_x == 120

        catchkit.handle_event(game, key(pygame.K_RIGHT))
        catchkit.handle_event(game, key(pygame.K_RIGHT))
        assert game.basket_x == 180

    def test_space_starts(self, game):
        catchkit.handle_event(game, key(pygame.K_SPACE))
        assert game.screen is ScreenState.PLAYING

    def test_enter_starts(self, game):
        catchkit.handle_event(game, key(pygame.K_RETURN))
        assert game.screen is ScreenState.PLAYING

    def test_space_ignored_while_playing(self, playing):
        playing.spawn()
        catchkit.handle_event(playing, key(pygame.K_SPACE))

        assert len(playing.items) == 1

    def test_space_plays_again(self, playing):
        for _ in range(10):
            playing.move_left()
        item = playing.spawn()
        item.x = 300
        while playing.screen is ScreenState.PLAYING:
            playing.physics_tick()

        catchkit.handle_event(playing, key(pygame.K_SPACE))

        assert playing.screen is ScreenState.PLAYING
        assert playing.basket_x == 150

    def test_r_restarts_any_time(self, playing):
        playing.spawn()
        catchkit.handle_event(playing, key(pygame.K_r))

        assert playing.items == []
        assert playing.screen is ScreenState.PLAYING

    def test_r_on_instructions(self, game):
        catchkit.handle_event(game, key(pygame.K_r))
        assert game.screen is ScreenState.INSTRUCTIONS

    def test_click_start_button(self, game):
        catchkit.handle_event(game, click(catchkit.START_BUTTON.center))
        assert game.screen is ScreenState.PLAYING

    def test_click_elsewhere(self, game):
        catchkit.handle_event(game, click((5, 5)))
        assert game.screen is ScreenState.INSTRUCTIONS

    def test_right_click_ignored(self, game):
        catchkit.handle_event(game, click(catchkit.START_BUTTON.center, button=3))
        assert game.screen is ScreenState.INSTRUCTIONS

    def test_click_restart_button(self, playing):
        playing.spawn()
        catchkit.handle_event(playing, click(catchkit.RESTART_BUTTON.center))

        assert playing.items == []


class TestButtons:
    """Test which buttons each screen shows."""

    @pytest.mark.parametrize("screen, names", [
        (ScreenState.INSTRUCTIONS, ["start"]),
        (ScreenState.PLAYING, ["restart"]),
        (ScreenState.GAME_OVER, ["play_again"]),
    ])
    def test_buttons_for(self, screen, names):
        assert list(catchkit.buttons_for(screen)) == names


@pytest.fixture
def surface():
    pygame.init()
    catchkit._emoji_state.update(font=None, checked=False)
    yield pygame.Surface((320, 500))
    catchkit._font_cache.clear()
    catchkit._emoji_state.update(font=None, checked=False)
    pygame.quit()


class TestDraw:
    """Smoke-test frame painting off screen."""

    def test_draws_every_screen(self, game, surface):
        catchkit.draw(surface, game.snapshot(), game.config)

        game.start()
        game.spawn()
        catchkit.draw(surface, game.snapshot(), game.config)

        item = game.spawn()
        item.x = 0
        while game.screen is ScreenState.PLAYING:
            game.physics_tick()
        catchkit.draw(surface, game.snapshot(), game.config)

    def test_basket_drawn_at_position(self, playing, surface):
        catchkit.draw(surface, playing.snapshot(), playing.config)

        assert tuple(surface.get_at((160, 490)))[:3] == catchkit.BASKET_COLOR
        assert tuple(surface.get_at((100, 490)))[:3] == catchkit.BACKGROUND


class TestStart:
    """Test main loop setup and teardown."""

    def test_window_failure_still_cleans_up(self, playing, monkeypatch):
        calls = []

        def broken_set_mode(size):
            raise pygame.error("no video device")

        monkeypatch.setattr(pygame, "init", lambda: calls.append("init"))
        monkeypatch.setattr(pygame, "quit", lambda: calls.append("quit"))
        monkeypatch.setattr(pygame.display, "set_mode", broken_set_mode)
        timers = playing.timers

        with pytest.raises(pygame.error):
            catchkit.start(playing)

        assert calls == ["init", "quit"]
        assert timers.closed
        assert playing.timers is None

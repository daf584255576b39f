# catchkit.py

import logging

import pygame

from catchgame import ScreenState

__all__ = [
    'start', 'draw', 'handle_event', 'buttons_for',
    'START_BUTTON', 'RESTART_BUTTON', 'PLAY_AGAIN_BUTTON',
]

logger = logging.getLogger(__name__)

# ——— Look ———
BACKGROUND    = (239, 246, 255)
BASKET_COLOR  = (244, 114, 182)
TEXT_COLOR    = (20, 20, 20)
SCORE_COLOR   = (20, 20, 20)
HIGH_COLOR    = (147, 51, 234)
OVERLAY_COLOR = (255, 255, 255, 242)
TITLE_COLOR   = (37, 99, 235)
LOSE_COLOR    = (239, 68, 68)
HINT_COLOR    = (107, 114, 128)

# fallback discs when no emoji font is around
SYMBOL_COLORS = {
    "🎉": (250, 204, 21),
    "🎂": (244, 114, 182),
    "⭐": (234, 179, 8),
    "🎁": (239, 68, 68),
    "🍰": (251, 207, 232),
    "❤️": (220, 38, 38),
}
EMOJI_FONTS = "notocoloremoji,segoeuiemoji,applecoloremoji,symbola"
ITEM_SIZE   = 24

# ——— Buttons ———
START_BUTTON      = pygame.Rect(100, 330, 120, 40)
PLAY_AGAIN_BUTTON = pygame.Rect(100, 330, 120, 40)
RESTART_BUTTON    = pygame.Rect(222, 462, 90, 26)

_BUTTON_LABELS = {
    'start':      ("Start Game", (59, 130, 246)),
    'restart':    ("Restart (R)", (249, 115, 22)),
    'play_again': ("Play Again", (34, 197, 94)),
}


def buttons_for(screen):
    """Clickable buttons shown on a given screen, by name."""
    if screen is ScreenState.INSTRUCTIONS:
        return {'start': START_BUTTON}
    if screen is ScreenState.PLAYING:
        return {'restart': RESTART_BUTTON}
    return {'play_again': PLAY_AGAIN_BUTTON}


# ——— Input ———
def handle_event(game, event):
    """
    Route one pygame event to the game. Returns False on QUIT.
      - arrows move the basket on any screen
      - R restarts at any time
      - SPACE / ENTER start from instructions, restart after game over
      - mouse clicks press the buttons of the current screen
    """
    if event.type == pygame.QUIT:
        return False

    if event.type == pygame.KEYDOWN:
        if event.key == pygame.K_LEFT:
            game.move_left()
        elif event.key == pygame.K_RIGHT:
            game.move_right()
        elif event.key == pygame.K_r:
            game.restart()
        elif event.key in (pygame.K_SPACE, pygame.K_RETURN):
            if game.screen is ScreenState.INSTRUCTIONS:
                game.start()
            elif game.screen is ScreenState.GAME_OVER:
                game.restart()

    elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        for name, rect in buttons_for(game.screen).items():
            if not rect.collidepoint(event.pos):
                continue
            if name == 'start':
                game.start()
            else:
                game.restart()
            break

    return True


# ——— Drawing ———
_font_cache  = {}
_emoji_state = {'font': None, 'checked': False}


def _font(size):
    f = _font_cache.get(size) or pygame.font.Font(None, size)
    _font_cache[size] = f
    return f


def _emoji_font():
    if not _emoji_state['checked']:
        _emoji_state['checked'] = True
        path = pygame.font.match_font(EMOJI_FONTS)
        if path:
            try:
                _emoji_state['font'] = pygame.font.Font(path, ITEM_SIZE)
            except (OSError, pygame.error) as exc:
                logger.warning("Emoji font %s failed to load: %s", path, exc)
        if _emoji_state['font'] is None:
            logger.warning("No emoji font found. Drawing coloured dots instead.")
    return _emoji_state['font']


def _write(surface, text, x, y, size=24, color=TEXT_COLOR):
    surf = _font(size).render(text, True, color)
    surface.blit(surf, (x, y))
    return surf


def _write_centered(surface, text, y, size=24, color=TEXT_COLOR):
    surf = _font(size).render(text, True, color)
    surface.blit(surf, ((surface.get_width() - surf.get_width()) // 2, y))


def _draw_item(surface, item):
    font = _emoji_font()
    if font is not None:
        try:
            surface.blit(font.render(item.symbol, True, TEXT_COLOR), (item.x, item.y))
            return
        except pygame.error:
            pass
    color = SYMBOL_COLORS.get(item.symbol, (100, 100, 100))
    r = ITEM_SIZE // 2
    pygame.draw.circle(surface, color, (int(item.x) + r, int(item.y) + r), r)


def _draw_button(surface, name, rect):
    label, color = _BUTTON_LABELS[name]
    pygame.draw.rect(surface, color, rect, border_radius=6)
    txt = _font(20 if rect.height < 30 else 26).render(label, True, (255, 255, 255))
    surface.blit(txt, txt.get_rect(center=rect.center))


def _draw_overlay(surface):
    veil = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    veil.fill(OVERLAY_COLOR)
    surface.blit(veil, (0, 0))


def _draw_instructions(surface):
    _draw_overlay(surface)
    _write_centered(surface, "Birthday Game", 110, size=44, color=TITLE_COLOR)
    _write_centered(surface, "How to Play:", 170, size=28)
    _write_centered(surface, "Use arrow keys to move the basket", 200, size=22)
    _write_centered(surface, "<-   ->", 225, size=26)
    _write_centered(surface, "Catch items - don't let them hit the bottom!", 255, size=18, color=HINT_COLOR)
    _write_centered(surface, "Beat your high score!", 275, size=20, color=HIGH_COLOR)
    _write_centered(surface, "Press R to restart anytime", 300, size=16, color=HINT_COLOR)


def _draw_game_over(surface, snapshot):
    _draw_overlay(surface)
    _write_centered(surface, "Game Over!", 150, size=48, color=LOSE_COLOR)
    _write_centered(surface, "You missed one!", 200, size=28)
    _write_centered(surface, f"Score: {snapshot.score}", 240, size=34, color=TITLE_COLOR)
    _write_centered(surface, f"High Score: {snapshot.high_score}", 280, size=30, color=HIGH_COLOR)


def draw(surface, snapshot, config):
    """Paint one frame of the game from a snapshot."""
    surface.fill(BACKGROUND)

    for item in snapshot.items:
        _draw_item(surface, item)

    basket = pygame.Rect(int(snapshot.basket_x), config.height - config.basket_height,
                         config.basket_width, config.basket_height)
    pygame.draw.rect(surface, BASKET_COLOR, basket, border_radius=6)

    _write(surface, f"Score: {snapshot.score}", 8, 8, size=26, color=SCORE_COLOR)
    high = _font(26).render(f"High: {snapshot.high_score}", True, HIGH_COLOR)
    surface.blit(high, (surface.get_width() - high.get_width() - 8, 8))

    if snapshot.screen is ScreenState.INSTRUCTIONS:
        _draw_instructions(surface)
    elif snapshot.screen is ScreenState.GAME_OVER:
        _draw_game_over(surface, snapshot)

    for name, rect in buttons_for(snapshot.screen).items():
        _draw_button(surface, name, rect)


# ——— Main loop ———
def start(game, title="Birthday Game", fps=60):
    """Open a window sized to the play area and run until closed."""
    cfg = game.config
    pygame.init()
    try:
        screen = pygame.display.set_mode((cfg.width, cfg.height))
        pygame.display.set_caption(title)
        clock = pygame.time.Clock()
        logger.info("Window open at %dx%d", cfg.width, cfg.height)

        running = True
        while running:
            dt_ms = clock.tick(fps)

            for event in pygame.event.get():
                if not handle_event(game, event):
                    running = False
                    break

            game.advance(dt_ms)
            draw(screen, game.snapshot(), cfg)
            pygame.display.flip()
    finally:
        game.close()
        _font_cache.clear()
        _emoji_state.update(font=None, checked=False)
        pygame.quit()

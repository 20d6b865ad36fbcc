"""Pygame front-end — draws snapshots and feeds pointer/keyboard input to the game."""

try:
    import pygame
except ImportError:
    pygame = None

from paddle_engine.commentary import CommentaryClient, CommentaryFeed
from paddle_engine.game import GameStatus
from paddle_engine.match import format_clock
from paddle_engine.session import MatchSession
from paddle_engine.types import Settings, Snapshot
from paddle_engine import arena

WIN_W = 1220
WIN_H = 640

ARENA_X = 20
ARENA_Y = 70
ARENA_RECT = (ARENA_X, ARENA_Y, arena.ARENA_WIDTH, arena.ARENA_HEIGHT)

# Colors
BG_COLOR = (2, 6, 23)
ARENA_BG = (15, 23, 42)
GRID = (30, 41, 59)
CENTER_LINE = (51, 65, 85)
CARD_BG = (15, 23, 42)
PANEL_BG = (17, 24, 39)
TEXT_WHITE = (226, 232, 240)
TEXT_DIM = (100, 116, 139)
P1_COLOR = (34, 211, 238)
P2_COLOR = (244, 114, 182)
ACCENT = (34, 211, 238)
WARN = (239, 68, 68)

DIFFICULTY_KEYS = list(arena.DIFFICULTIES.keys())
COLOR_KEYS = list(arena.THEME_COLORS.keys())

OVERLAY_TITLES = {
    GameStatus.START: "READY PLAYER ONE",
    GameStatus.PAUSED: "PAUSED",
    GameStatus.GAMEOVER: "MATCH OVER",
}


def _cycle(options, current, step=1):
    return options[(options.index(current) + step) % len(options)]


def _wrap(text, font, width):
    words = text.split()
    lines, line = [], ""
    for word in words:
        candidate = f"{line} {word}".strip()
        if font.size(candidate)[0] <= width:
            line = candidate
        else:
            if line:
                lines.append(line)
            line = word
    if line:
        lines.append(line)
    return lines


def _draw_arena(surface, snap: Snapshot, color):
    surface.fill(ARENA_BG)

    for x in range(0, arena.ARENA_WIDTH, 40):
        pygame.draw.line(surface, GRID, (x, 0), (x, arena.ARENA_HEIGHT))
    for y in range(0, arena.ARENA_HEIGHT, 40):
        pygame.draw.line(surface, GRID, (0, y), (arena.ARENA_WIDTH, y))

    cx = arena.ARENA_WIDTH // 2
    for y in range(0, arena.ARENA_HEIGHT, 20):
        pygame.draw.line(surface, CENTER_LINE, (cx, y), (cx, y + 10), 2)

    # Ball, with a dot orbiting at a rate proportional to spin
    ball = snap.ball
    bx, by, r = int(ball.x), int(ball.y), int(ball.radius)
    glow = pygame.Surface((r * 6, r * 6), pygame.SRCALPHA)
    pygame.draw.circle(glow, (color.r, color.g, color.b, 50), (r * 3, r * 3), r * 3)
    surface.blit(glow, (bx - r * 3, by - r * 3))
    pygame.draw.circle(surface, color, (bx, by), r)

    angle = (pygame.time.get_ticks() / 100) * (ball.spin / 5)
    dot = pygame.math.Vector2(r * 0.5, 0).rotate_rad(angle)
    shine = pygame.Surface((r * 2, r * 2), pygame.SRCALPHA)
    pygame.draw.circle(shine, (255, 255, 255, 100), (int(r + dot.x), int(r + dot.y)), max(2, int(r * 0.3)))
    surface.blit(shine, (bx - r, by - r))

    for paddle in (snap.left, snap.right):
        rect = pygame.Rect(int(paddle.x), int(paddle.y), int(paddle.width), int(paddle.height))
        pygame.draw.rect(surface, color, rect, border_radius=4)


def run_visualizer(settings: Settings = None):
    """Launch the Pygame front-end."""
    if pygame is None:
        print("ERROR: pygame is not installed. Run: pip install pygame")
        return

    settings = settings or Settings()

    feed = None
    try:
        feed = CommentaryFeed(CommentaryClient())
    except ValueError as e:
        print(f"Commentary disabled: {e}")

    session = MatchSession(settings, commentary=feed)

    pygame.init()
    screen = pygame.display.set_mode((WIN_W, WIN_H))
    pygame.display.set_caption("Neon Paddle")
    clock = pygame.time.Clock()

    font_sm = pygame.font.SysFont("monospace", 12)
    font_md = pygame.font.SysFont("monospace", 14)
    font_lg = pygame.font.SysFont("monospace", 22, bold=True)
    font_xl = pygame.font.SysFont("monospace", 34, bold=True)
    font_title = pygame.font.SysFont("monospace", 15, bold=True)

    arena_surface = pygame.Surface((arena.ARENA_WIDTH, arena.ARENA_HEIGHT))
    key_names = {pygame.K_UP: "ArrowUp", pygame.K_DOWN: "ArrowDown"}

    def change_settings(**changes):
        nonlocal settings
        values = {
            "mode": settings.mode,
            "difficulty": settings.difficulty,
            "color": settings.color,
            "personality": settings.personality,
        }
        values.update(changes)
        settings = Settings(**values)
        session.apply_settings(settings)

    running = True
    while running:
        elapsed = clock.tick(60) / 1000.0
        controls = session.game.controls

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.MOUSEMOTION:
                controls.pointer_move(event.pos[0], event.pos[1], ARENA_RECT)
            elif event.type == pygame.KEYUP and event.key in key_names:
                controls.key_up(key_names[event.key])
            elif event.type == pygame.KEYDOWN:
                if event.key in key_names:
                    controls.key_down(key_names[event.key])
                elif event.key == pygame.K_q:
                    running = False
                elif event.key == pygame.K_SPACE:
                    session.toggle()
                elif event.key == pygame.K_r:
                    session.restart()
                elif event.key == pygame.K_m:
                    change_settings(mode=_cycle(list(arena.MODES), settings.mode))
                elif event.key == pygame.K_d:
                    change_settings(difficulty=_cycle(DIFFICULTY_KEYS, settings.difficulty))
                elif event.key == pygame.K_p:
                    change_settings(personality=_cycle(list(arena.PERSONALITIES), settings.personality))
                elif event.key == pygame.K_c:
                    current = next((k for k, v in arena.THEME_COLORS.items() if v == settings.color), COLOR_KEYS[0])
                    change_settings(color=arena.THEME_COLORS[_cycle(COLOR_KEYS, current)])

        snap = session.advance(elapsed)
        match = session.match
        color = pygame.Color(settings.color)

        # ---- DRAW ----
        screen.fill(BG_COLOR)

        # Header
        pygame.draw.rect(screen, CARD_BG, (0, 0, WIN_W, 56))
        pygame.draw.line(screen, ACCENT, (0, 55), (WIN_W, 55), 2)
        screen.blit(font_lg.render("NEON PADDLE", True, ACCENT), (20, 16))

        time_color = WARN if match.time_left < 10 else TEXT_WHITE
        screen.blit(font_sm.render("TIME", True, TEXT_DIM), (330, 6))
        screen.blit(font_xl.render(format_clock(match.time_left), True, time_color), (310, 16))

        right_label = "AI" if settings.mode == "1P" else "P2"
        screen.blit(font_sm.render("P1", True, TEXT_DIM), (520, 6))
        screen.blit(font_xl.render(str(match.left_score), True, P1_COLOR), (510, 16))
        screen.blit(font_lg.render(":", True, TEXT_DIM), (570, 22))
        screen.blit(font_sm.render(right_label, True, TEXT_DIM), (610, 6))
        screen.blit(font_xl.render(str(match.right_score), True, P2_COLOR), (600, 16))

        hint = font_sm.render("SPACE:play/pause  R:reset  M:mode  D:difficulty  P:persona  C:color  Q:quit", True, TEXT_DIM)
        screen.blit(hint, (WIN_W - hint.get_width() - 14, 22))

        # Arena
        _draw_arena(arena_surface, snap, color)
        screen.blit(arena_surface, (ARENA_X, ARENA_Y))
        pygame.draw.rect(screen, (30, 41, 59), (ARENA_X - 4, ARENA_Y - 4, arena.ARENA_WIDTH + 8, arena.ARENA_HEIGHT + 8), 4, border_radius=8)

        if session.status != GameStatus.PLAYING:
            overlay = pygame.Surface((arena.ARENA_WIDTH, arena.ARENA_HEIGHT), pygame.SRCALPHA)
            overlay.fill((0, 0, 0, 150))
            screen.blit(overlay, (ARENA_X, ARENA_Y))
            title = font_xl.render(OVERLAY_TITLES[session.status], True, TEXT_WHITE)
            screen.blit(title, (ARENA_X + (arena.ARENA_WIDTH - title.get_width()) // 2, ARENA_Y + 200))
            sub = "Move to control paddle" if settings.mode == "1P" else "L-Half for P1, R-Half for P2 (arrows for P2)"
            sub_txt = font_md.render(sub, True, TEXT_DIM)
            screen.blit(sub_txt, (ARENA_X + (arena.ARENA_WIDTH - sub_txt.get_width()) // 2, ARENA_Y + 250))

        # ---- PANEL ----
        panel_x = ARENA_X + arena.ARENA_WIDTH + 20
        panel_w = WIN_W - panel_x - 14
        pygame.draw.rect(screen, PANEL_BG, (panel_x, ARENA_Y - 4, panel_w, arena.ARENA_HEIGHT + 8), border_radius=8)

        px = panel_x + 12
        py = ARENA_Y + 8
        screen.blit(font_title.render("CONFIGURATION", True, ACCENT), (px, py))
        py += 22
        rows = [
            ("Mode", "1P vs AI" if settings.mode == "1P" else "LOCAL 2P"),
            ("Difficulty", arena.DIFFICULTIES[settings.difficulty]["label"]),
            ("Personality", settings.personality.capitalize()),
        ]
        for label, value in rows:
            screen.blit(font_md.render(f"{label:<12}{value}", True, TEXT_WHITE), (px, py))
            py += 18
        pygame.draw.circle(screen, color, (px + 6, py + 8), 6)
        screen.blit(font_md.render("Theme", True, TEXT_DIM), (px + 18, py))
        py += 28

        pygame.draw.line(screen, GRID, (px, py), (px + panel_w - 24, py), 1)
        py += 8
        screen.blit(font_title.render("RALLY", True, ACCENT), (px, py))
        py += 20
        screen.blit(font_md.render(f"Current {snap.rally:>3}   Best {session.game.scorekeeper.longest_rally:>3}", True, TEXT_WHITE), (px, py))
        py += 18
        speed = (snap.ball.vx ** 2 + snap.ball.vy ** 2) ** 0.5
        screen.blit(font_sm.render(f"Speed {speed:5.1f}/{arena.MAX_BALL_SPEED}   Spin {snap.ball.spin:+5.2f}", True, TEXT_DIM), (px, py))
        py += 26

        pygame.draw.line(screen, GRID, (px, py), (px + panel_w - 24, py), 1)
        py += 8
        screen.blit(font_title.render("AI SIDEKICK", True, ACCENT), (px, py))
        py += 22
        if feed is None or not feed.items:
            screen.blit(font_sm.render("Ready for play-by-play analysis...", True, TEXT_DIM), (px, py))
        else:
            for i, item in enumerate(feed.items):
                text_color = TEXT_WHITE if i == 0 else TEXT_DIM
                for line in _wrap(f"\"{item.text}\"", font_sm, panel_w - 24):
                    screen.blit(font_sm.render(line, True, text_color), (px, py))
                    py += 14
                py += 8

        pygame.display.flip()

    if feed is not None:
        feed.shutdown()
    pygame.quit()

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pygame

from grammar_blocks.env.grammar_blocks_env import DEFAULT_TARGETS
from grammar_blocks.game import GameConfig
from grammar_blocks.report import Report, ReportLog
from grammar_blocks.session import Phase, Session, TerminalReason
from grammar_blocks.session.engine import GrammarBlocksGame

logger = logging.getLogger(__name__)

CELL = 30
MARGIN = 20
TOKEN_PAD = 6
TOKEN_GAP = 8

REASON_TEXT = {
    TerminalReason.COMPLETED: "Round list completed",
    TerminalReason.NO_FIT: "Game over - no room for the pieces",
    TerminalReason.WRONG_LIMIT: "Game over - too many wrong answers",
}


def end_summary(session: Session) -> List[str]:
    """Lines for the end screen: outcome, score, then each missed question."""
    if not session.is_terminal:
        return []
    lines = [f"{REASON_TEXT[session.reason]} - lines cleared: {session.score}"]
    if session.wrong_items:
        lines.append("Missed questions:")
        for item in session.wrong_items:
            lines.append(f"  {item.question}")
            lines.append(f"    -> {item.correct}")
    return lines


def _color_for_value(v: int) -> Tuple[int, int, int]:
    return (40, 40, 48) if v == 0 else (70, 200, 120)


def load_targets(path: Optional[str]) -> List[str]:
    if path is None:
        return list(DEFAULT_TARGETS)
    lines = Path(path).read_text(encoding="utf-8").splitlines()
    return [line.strip() for line in lines if line.strip()]


def layout_tokens(font: pygame.font.Font, tokens: Sequence[str], x0: int, y0: int, max_w: int) -> List[pygame.Rect]:
    """Flow token boxes left to right, wrapping at max_w."""
    rects: List[pygame.Rect] = []
    x, y = x0, y0
    line_h = font.get_height() + TOKEN_PAD * 2
    for token in tokens:
        w = font.size(token)[0] + TOKEN_PAD * 2
        if x > x0 and x + w > x0 + max_w:
            x = x0
            y += line_h + TOKEN_GAP
        rects.append(pygame.Rect(x, y, w, line_h))
        x += w + TOKEN_GAP
    return rects


def draw_tokens(screen: pygame.Surface, font: pygame.font.Font, tokens: Sequence[str],
                rects: Sequence[pygame.Rect], fill: Tuple[int, int, int]) -> None:
    for token, rect in zip(tokens, rects):
        pygame.draw.rect(screen, fill, rect, border_radius=6)
        img = font.render(token, True, (15, 15, 20))
        screen.blit(img, (rect.x + TOKEN_PAD, rect.y + TOKEN_PAD))


def draw_board(screen: pygame.Surface, grid, locked: bool) -> None:
    h, w = grid.shape
    for y in range(h):
        for x in range(w):
            rect = pygame.Rect(MARGIN + x * CELL, MARGIN + y * CELL, CELL - 1, CELL - 1)
            color = _color_for_value(int(grid[y, x]))
            if locked:
                color = tuple(c // 2 for c in color)
            pygame.draw.rect(screen, color, rect)


def bag_rects(game: GrammarBlocksGame, x0: int) -> List[pygame.Rect]:
    """Bounding rects of the dealt pieces, stacked top to bottom."""
    rects: List[pygame.Rect] = []
    y0 = MARGIN
    for piece in game.session.bag:
        rects.append(pygame.Rect(x0, y0, piece.width * CELL, piece.height * CELL))
        y0 += (piece.height + 1) * CELL
    return rects


def draw_bag(screen: pygame.Surface, game: GrammarBlocksGame, x0: int) -> None:
    session = game.session
    for piece, outline in zip(session.bag, bag_rects(game, x0)):
        for x, y in piece.cells:
            rect = pygame.Rect(outline.x + x * CELL, outline.y + y * CELL, CELL - 1, CELL - 1)
            pygame.draw.rect(screen, (200, 180, 60), rect)
        if piece.id == session.selected:
            pygame.draw.rect(screen, (255, 255, 255), outline, 2)


def draw_ghost(screen: pygame.Surface, game: GrammarBlocksGame, row: int, col: int) -> None:
    session = game.session
    piece = session.find_piece(session.selected)
    if piece is None:
        return
    color = (120, 220, 140) if session.grid.can_place(piece, row, col) else (220, 120, 120)
    for r, c in piece.cells_at(row, col):
        if session.grid.is_inside(r, c):
            rect = pygame.Rect(MARGIN + c * CELL, MARGIN + r * CELL, CELL - 1, CELL - 1)
            pygame.draw.rect(screen, color, rect, 2)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Grammar Blocks")
    p.add_argument("--targets", type=str, default=None, help="Text file with one sentence per line")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--shuffle", action="store_true", help="Shuffle the round order")
    p.add_argument("--log", type=str, default="grammar_blocks_reports.jsonl")
    return p


def run(targets: Sequence[str], config: GameConfig, log_path: Optional[str]) -> None:
    def _announce(report: Report) -> None:
        logger.info("Report: %s", report.to_dict())

    game = GrammarBlocksGame(
        targets,
        listeners=[_announce],
        report_log=ReportLog(log_path) if log_path else None,
        config=config,
    )

    size = config.grid_size
    board_px = size * CELL
    side_panel_w = 6 * CELL
    width = MARGIN * 3 + board_px + side_panel_w
    height = MARGIN * 2 + board_px + 260
    bag_x0 = MARGIN * 2 + board_px
    text_y0 = MARGIN * 2 + board_px

    pygame.init()
    try:
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Grammar Blocks")
        font = pygame.font.SysFont(None, 24)
        clock = pygame.time.Clock()

        key_to_index = {pygame.K_1: 0, pygame.K_2: 1, pygame.K_3: 2,
                        pygame.K_KP1: 0, pygame.K_KP2: 1, pygame.K_KP3: 2}

        max_w = width - MARGIN * 2
        running = True
        while running:
            for event in pygame.event.get():
                session = game.session
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_n:
                        game.reset()
                    elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                        if session.round.checked is None:
                            game.submit()
                        else:
                            game.acknowledge()
                    elif event.key in key_to_index:
                        idx = key_to_index[event.key]
                        if idx < len(session.bag):
                            game.select_piece(session.bag[idx].id)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    mx, my = event.pos
                    col = (mx - MARGIN) // CELL
                    row = (my - MARGIN) // CELL
                    if session.phase is Phase.PUZZLE and session.grid.is_inside(row, col):
                        game.click_cell(row, col)
                        continue
                    for i, rect in enumerate(bag_rects(game, bag_x0)):
                        if rect.collidepoint(mx, my):
                            game.select_piece(session.bag[i].id)
                            break
                    tray_rects = layout_tokens(font, session.round.tray, MARGIN, text_y0 + 130, max_w)
                    for i, rect in enumerate(tray_rects):
                        if rect.collidepoint(mx, my):
                            game.pick_token(i)
                            break
                    picked_rects = layout_tokens(font, session.round.picked, MARGIN, text_y0 + 30, max_w)
                    for i, rect in enumerate(picked_rects):
                        if rect.collidepoint(mx, my):
                            game.unpick_token(i)
                            break

            session = game.session
            screen.fill((15, 15, 20))
            draw_board(screen, session.grid.grid, locked=session.phase is not Phase.PUZZLE)
            mx, my = pygame.mouse.get_pos()
            draw_ghost(screen, game, (my - MARGIN) // CELL, (mx - MARGIN) // CELL)
            draw_bag(screen, game, bag_x0)

            header = (f"Round {session.round_index + 1}/{len(session.targets)}   "
                      f"Cleared: {session.score}   Wrong: {session.wrong_count}/{session.config.wrong_limit}")
            screen.blit(font.render(header, True, (230, 230, 230)), (MARGIN, text_y0))
            if session.is_terminal:
                for i, line in enumerate(end_summary(session)):
                    screen.blit(font.render(line, True, (230, 230, 230)), (MARGIN, text_y0 + 30 + i * 22))
            else:
                picked_fill = {None: (230, 230, 230), True: (150, 230, 150), False: (240, 150, 150)}[session.round.checked]
                draw_tokens(screen, font, session.round.picked,
                            layout_tokens(font, session.round.picked, MARGIN, text_y0 + 30, max_w), picked_fill)
                draw_tokens(screen, font, session.round.tray,
                            layout_tokens(font, session.round.tray, MARGIN, text_y0 + 130, max_w), (200, 200, 210))

            if session.is_terminal:
                status = f"{REASON_TEXT[session.reason]} - score {session.score}. Press N to restart"
            elif session.round.checked is False:
                status = f"Correct: {session.round.correct_text}   (Enter to continue)"
            elif session.phase is Phase.PUZZLE:
                status = "Select a piece (1/2/3) and click the board"
            else:
                status = "Click words to build the sentence, Enter to submit"
            screen.blit(font.render(status, True, (255, 210, 120)), (MARGIN, height - MARGIN - 10))

            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args()
    config = GameConfig(random_seed=args.seed, shuffle_targets=args.shuffle)
    run(load_targets(args.targets), config, args.log)


if __name__ == "__main__":  # pragma: no cover
    main()

from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from setgame.engine.types import Card

Color = tuple[int, int, int]

SYMBOL_COLORS: dict[int, Color] = {
    0: (210, 40, 40),
    1: (30, 150, 60),
    2: (40, 70, 210),
}
CARD_FACE: Color = (245, 245, 245)
CARD_EDGE: Color = (112, 128, 144)
SELECTED_EDGE: Color = (240, 200, 60)

OUTLINE = 0
HATCHED = 1
SOLID = 2


def _shape_points(shape: int, rect: pygame.Rect) -> list[tuple[int, int]]:
    if shape == 0:
        return [(rect.centerx, rect.top), (rect.right, rect.bottom), (rect.left, rect.bottom)]
    if shape == 1:
        return [rect.topleft, rect.topright, rect.bottomright, rect.bottomleft]
    raise ValueError(f"Shape {shape} has no polygon")


def _draw_filled(surface: pygame.Surface, shape: int, rect: pygame.Rect, color: tuple[int, ...]) -> None:
    if shape == 2:
        pygame.draw.ellipse(surface, color, rect)
    else:
        pygame.draw.polygon(surface, color, _shape_points(shape, rect))


def _draw_outline(surface: pygame.Surface, shape: int, rect: pygame.Rect, color: Color, width: int) -> None:
    if shape == 2:
        pygame.draw.ellipse(surface, color, rect, width=width)
    else:
        pygame.draw.polygon(surface, color, _shape_points(shape, rect), width=width)


def _draw_hatch(surface: pygame.Surface, shape: int, rect: pygame.Rect, color: Color) -> None:
    # Diagonal lines masked to the shape's silhouette
    size = (rect.width, rect.height)
    local = pygame.Rect((0, 0), size)
    hatch = pygame.Surface(size, pygame.SRCALPHA)
    step = max(4, rect.width // 8)
    for offset in range(-rect.height, rect.width, step):
        pygame.draw.line(hatch, color, (offset, rect.height), (offset + rect.height, 0), 2)
    mask = pygame.Surface(size, pygame.SRCALPHA)
    _draw_filled(mask, shape, local, (255, 255, 255, 255))
    hatch.blit(mask, (0, 0), special_flags=pygame.BLEND_RGBA_MIN)
    surface.blit(hatch, rect.topleft)


def draw_symbol(surface: pygame.Surface, card: Card, rect: pygame.Rect) -> None:
    color = SYMBOL_COLORS[card.color]
    if card.filling == SOLID:
        _draw_filled(surface, card.shape, rect, color)
    elif card.filling == HATCHED:
        _draw_hatch(surface, card.shape, rect, color)
    _draw_outline(surface, card.shape, rect, color, width=max(2, rect.width // 16))


def symbol_rects(amount: int, face: pygame.Rect) -> list[pygame.Rect]:
    """Layout for amount 0/1/2 -> one, two (diagonal) or three (triangle) symbols."""
    if amount == 0:
        s = face.width // 2
        return [pygame.Rect(face.centerx - s // 2, face.centery - s // 2, s, s)]
    s = face.width // 3
    pad = face.width // 10
    left = face.left + pad
    right = face.right - pad - s
    top = face.top + pad
    bottom = face.bottom - pad - s
    if amount == 1:
        return [pygame.Rect(left, top, s, s), pygame.Rect(right, bottom, s, s)]
    return [
        pygame.Rect(face.centerx - s // 2, top, s, s),
        pygame.Rect(left, bottom, s, s),
        pygame.Rect(right, bottom, s, s),
    ]


def render_card(card: Card, size: tuple[int, int], selected: bool = False) -> pygame.Surface:
    w, h = size
    surface = pygame.Surface(size, pygame.SRCALPHA)
    margin = max(4, w // 20)
    face = pygame.Rect(margin, margin, w - 2 * margin, h - 2 * margin)
    radius = max(6, w // 9)
    pygame.draw.rect(surface, CARD_FACE, face, border_radius=radius)
    edge = SELECTED_EDGE if selected else CARD_EDGE
    pygame.draw.rect(surface, edge, face, width=6 if selected else 3, border_radius=radius)
    for rect in symbol_rects(card.amount, face):
        draw_symbol(surface, card, rect)
    return surface

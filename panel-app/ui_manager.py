from __future__ import annotations

"""
Matrix Panel - Pygame Host Window

Owns one MatrixDisplay, feeds it keyboard and resize events, pumps its
animation driver, and paints its draw list.  Also draws a small controls
overlay (text entry line + status) along the bottom of the window, which
Ctrl+H hides to give the whole window to the panel.

The PanelWindow can be constructed in two modes:

  1. Hardware mode (no surface argument):
       win = PanelWindow()
     pygame.init() is called and a resizable window is created.

  2. Headless / test mode (surface provided):
       win = PanelWindow(surface)
     pygame is NOT re-initialised.  The supplied surface is used directly
     and display-flip / clock calls are skipped.

Keys
----
  printable keys   edit the text line        Return     apply it
  Backspace        delete last character     Escape     quit
  Ctrl+K  clock on/off        Ctrl+S  scroll on/off    Ctrl+B  bounce/wrap
  Ctrl+1..5  scroll speed     Ctrl+P  next pixel colour
  Ctrl+G  next background     Ctrl+I  idle dots on/off Ctrl+H  hide controls
"""

import logging

import pygame

import config
import rasterizer
from matrix_display import DisplayMode, MatrixDisplay, ScrollStyle

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Layout constants
# ---------------------------------------------------------------------------

HUD_H       = 48    # controls overlay height, pinned to the bottom
HUD_PAD     = 8

# ---------------------------------------------------------------------------
# Colour palette
# ---------------------------------------------------------------------------

HUD_BG      = (8,   15,  30)
HUD_BORDER  = (30,  41,  59)
TEXT_COLOR  = (226, 232, 240)
TEXT_MUTED  = (150, 160, 180)
ACCENT      = (56,  189, 248)

_SPEED_KEYS = {
    pygame.K_1: 1,
    pygame.K_2: 2,
    pygame.K_3: 3,
    pygame.K_4: 4,
    pygame.K_5: 5,
}


# ---------------------------------------------------------------------------
# Painting
# ---------------------------------------------------------------------------

def paint_frame(
    surface: pygame.Surface,
    frame: rasterizer.Frame,
    area: pygame.Rect | None = None,
) -> None:
    """Paint *frame* onto *surface*.

    Fills *area* (default: the whole surface) with the bezel colour, then
    draws every circle clipped to the grid rectangle.  The surface's
    previous clip is restored afterwards.

    Args:
        surface: Target surface.
        frame:   Draw list from rasterizer.render().
        area:    Region the panel occupies on *surface*.
    """
    surface.fill(frame.bezel_color, area)

    previous_clip = surface.get_clip()
    x, y, w, h = frame.clip
    surface.set_clip(pygame.Rect(int(x), int(y), int(w + 0.5), int(h + 0.5)))
    try:
        for circle in frame.circles:
            pygame.draw.circle(surface, circle.color, circle.center, circle.radius)
    finally:
        surface.set_clip(previous_clip)


# ---------------------------------------------------------------------------
# PanelWindow
# ---------------------------------------------------------------------------

class PanelWindow:
    """Thin shell around a MatrixDisplay: events in, pixels out.

    Redraw requests from the display only set a dirty flag; draw() paints
    at most once per call however many state changes happened since.

    Construction:
        PanelWindow()          – hardware mode: calls pygame.init(), opens a
                                 resizable WINDOW_W x WINDOW_H window.
        PanelWindow(surface)   – test/headless mode: paints onto *surface*,
                                 skips display management.

    Args:
        surface: Optional pygame.Surface for headless / test mode.
        now_fn:  Optional time source forwarded to the display (clock mode).
    """

    # ------------------------------------------------------------------
    # Initialisation
    # ------------------------------------------------------------------

    def __init__(self, surface=None, now_fn=None) -> None:
        self._test_mode = surface is not None

        if self._test_mode:
            pygame.font.init()
            self.screen = surface
            self.clock  = None
        else:
            pygame.init()
            min_w, min_h = MatrixDisplay.minimum_size()
            self.screen = pygame.display.set_mode(
                (max(config.WINDOW_W, min_w), max(config.WINDOW_H, min_h + HUD_H)),
                pygame.RESIZABLE,
            )
            pygame.display.set_caption("Matrix Display")
            self.clock = pygame.time.Clock()
        self._init_fonts_safe()

        # Shell state (mirrors the controls of a desktop window)
        self.controls_visible: bool = True
        self.input_buffer: str      = config.DEFAULT_TEXT
        self.scroll_checked: bool   = False
        self._pixel_idx: int        = 0
        self._background_idx: int   = 0
        self._dirty: bool           = True

        panel_w, panel_h = self.panel_rect().size
        self.display = MatrixDisplay(
            panel_w, panel_h,
            on_redraw=self.request_redraw,
            now_fn=now_fn,
        )
        self.display.set_color(config.PIXEL_PALETTE[self._pixel_idx])
        self.display.set_background_color(config.BACKGROUND_PALETTE[self._background_idx])
        self.apply_text()

    # ------------------------------------------------------------------
    # Font loading
    # ------------------------------------------------------------------

    def _init_fonts_safe(self) -> None:
        """Load DejaVu Sans Mono for the overlay, falling back to the default font."""
        def _load(family: str, size: int, bold: bool = False) -> pygame.font.Font:
            try:
                font = pygame.font.SysFont(family, size, bold=bold)
                if font is None:
                    raise RuntimeError("SysFont returned None")
                return font
            except Exception as exc:
                log.warning("Font %s unavailable (%s), using default", family, exc)
                return pygame.font.Font(None, size)

        self.body_font  = _load("dejavusansmono", 15)
        self.small_font = _load("dejavusansmono", 12)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def panel_rect(self) -> pygame.Rect:
        """Region of the window given to the panel (everything above the HUD)."""
        w, h = self.screen.get_size()
        if self.controls_visible:
            h = max(1, h - HUD_H)
        return pygame.Rect(0, 0, w, h)

    def hud_rect(self) -> pygame.Rect:
        w, h = self.screen.get_size()
        return pygame.Rect(0, h - HUD_H, w, HUD_H)

    def _sync_panel_size(self) -> None:
        rect = self.panel_rect()
        self.display.notify_resized(rect.width, rect.height)
        self.request_redraw()

    # ------------------------------------------------------------------
    # Shell actions
    # ------------------------------------------------------------------

    def request_redraw(self) -> None:
        self._dirty = True

    @property
    def needs_redraw(self) -> bool:
        return self._dirty

    def set_scroll_checked(self, checked: bool) -> None:
        """Flip the scroll toggle and forward it to the display."""
        self.display.set_scroll_enabled(checked)
        self.scroll_checked = self.display.scroll_enabled
        self.request_redraw()

    def _sync_scroll_toggle(self) -> None:
        needs_scroll = self.display.requires_scrolling()
        if self.scroll_checked != needs_scroll:
            self.set_scroll_checked(needs_scroll)

    def apply_text(self) -> None:
        """Send the text line to the panel and tick the scroll toggle if needed."""
        self.display.set_text(self.input_buffer)
        self._sync_scroll_toggle()

    def toggle_clock(self) -> None:
        if self.display.mode is DisplayMode.TEXT:
            self.set_scroll_checked(False)
            self.display.set_mode(DisplayMode.CLOCK)
            log.info("Clock mode on")
        else:
            self.display.set_mode(DisplayMode.TEXT)
            if not self.input_buffer.strip():
                self.input_buffer = config.DEFAULT_TEXT
            self.apply_text()
            log.info("Clock mode off")

    def toggle_bounce(self) -> None:
        if self.display.scroll_style is ScrollStyle.BOUNCE:
            self.display.set_scroll_style(ScrollStyle.WRAP)
        else:
            self.display.set_scroll_style(ScrollStyle.BOUNCE)

    def cycle_pixel_color(self) -> None:
        self._pixel_idx = (self._pixel_idx + 1) % len(config.PIXEL_PALETTE)
        self.display.set_color(config.PIXEL_PALETTE[self._pixel_idx])

    def cycle_background_color(self) -> None:
        self._background_idx = (self._background_idx + 1) % len(config.BACKGROUND_PALETTE)
        self.display.set_background_color(config.BACKGROUND_PALETTE[self._background_idx])

    def toggle_controls(self) -> None:
        self.controls_visible = not self.controls_visible
        self._sync_panel_size()

    # ------------------------------------------------------------------
    # Main-loop hooks
    # ------------------------------------------------------------------

    def handle_event(self, event) -> bool:
        """Handle a single pygame event.

        Returns:
            ``False`` if the application should quit, ``True`` otherwise.
        """
        if event.type == pygame.QUIT:
            return False
        if event.type in (pygame.VIDEORESIZE, pygame.WINDOWSIZECHANGED):
            self._sync_panel_size()
            return True
        if event.type != pygame.KEYDOWN:
            return True

        if event.key == pygame.K_ESCAPE:
            return False
        if event.mod & pygame.KMOD_CTRL:
            self._handle_shortcut(event.key)
        elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            if self.display.mode is DisplayMode.TEXT:
                self.apply_text()
        elif event.key == pygame.K_BACKSPACE:
            self.input_buffer = self.input_buffer[:-1]
            self.request_redraw()
        elif event.unicode and event.unicode.isprintable():
            self.input_buffer += event.unicode
            self.request_redraw()
        return True

    def _handle_shortcut(self, key: int) -> None:
        if key == pygame.K_h:
            self.toggle_controls()
        elif key == pygame.K_k:
            self.toggle_clock()
        elif key == pygame.K_s:
            if self.display.mode is DisplayMode.CLOCK:
                return
            self.set_scroll_checked(not self.scroll_checked)
        elif key == pygame.K_b:
            self.toggle_bounce()
        elif key == pygame.K_p:
            self.cycle_pixel_color()
        elif key == pygame.K_g:
            self.cycle_background_color()
        elif key == pygame.K_i:
            self.display.set_show_idle_cells(not self.display.show_idle_cells)
        elif key in _SPEED_KEYS:
            self.display.set_scroll_speed(_SPEED_KEYS[key])
            self.request_redraw()

    def handle_events(self) -> bool:
        """Drain the pygame event queue.

        Returns:
            ``False`` if the application should quit, ``True`` otherwise.
        """
        running = True
        for event in pygame.event.get():
            if not self.handle_event(event):
                running = False
        return running

    def update(self, dt: float) -> None:
        """Advance the panel animation by *dt* seconds."""
        self.display.advance(dt * 1000.0)

    def draw(self) -> bool:
        """Repaint if anything changed since the last draw.

        Returns:
            ``True`` if the window was repainted.
        """
        painted = False
        if self._dirty:
            self._dirty = False
            paint_frame(self.screen, rasterizer.render(self.display), self.panel_rect())
            if self.controls_visible:
                self.draw_controls()
            painted = True

        if not self._test_mode:
            if painted:
                pygame.display.flip()
            if self.clock is not None:
                self.clock.tick(config.FRAME_RATE)
        return painted

    # ------------------------------------------------------------------
    # Controls overlay
    # ------------------------------------------------------------------

    def status_line(self) -> str:
        d = self.display
        if d.mode is DisplayMode.CLOCK:
            return "CLOCK   Ctrl+K text mode   Ctrl+H hide"
        scroll = "on" if self.scroll_checked else "off"
        fits = "overflow" if d.requires_scrolling() else "fits"
        return (
            f"scroll {scroll} ({d.scroll_style.value}, speed {d.speed_level})  "
            f"{fits}   Ctrl+K clock  Ctrl+S scroll  Ctrl+B bounce  "
            f"Ctrl+1-5 speed  Ctrl+P/G colours  Ctrl+H hide"
        )

    def draw_controls(self) -> None:
        """Draw the text line and status along the bottom of the window."""
        rect = self.hud_rect()
        pygame.draw.rect(self.screen, HUD_BG, rect)
        pygame.draw.line(self.screen, HUD_BORDER,
                         (rect.left, rect.top), (rect.right - 1, rect.top), 1)

        if self.display.mode is DisplayMode.TEXT:
            prompt = f"> {self.input_buffer}_"
            prompt_color = TEXT_COLOR
        else:
            prompt = "> (clock)"
            prompt_color = TEXT_MUTED
        self.draw_text(prompt, self.body_font, prompt_color,
                       rect.left + HUD_PAD, rect.top + 6)
        self.draw_text(self.status_line(), self.small_font, ACCENT,
                       rect.left + HUD_PAD, rect.bottom - 6, anchor="bottomleft")

    def draw_text(
        self,
        text: str,
        font: pygame.font.Font,
        color: tuple,
        x: int,
        y: int,
        anchor: str = "topleft",
    ) -> pygame.Rect:
        """Render *text* onto ``self.screen`` at the given anchor position."""
        surf = font.render(text, True, color)
        rect = surf.get_rect()
        setattr(rect, anchor, (x, y))
        self.screen.blit(surf, rect)
        return rect

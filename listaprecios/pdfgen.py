# listaprecios/pdfgen.py
import os, datetime
from reportlab.pdfgen import canvas
from reportlab.lib.pagesizes import A4
from reportlab.lib import colors

from .cart import CartLine
from .pricing import ExchangeRates, price_cart
from .utils import fmt_money_ui, fmt_rate, currency_type_label

# =====================================================
# Layout (puntos PDF; origen abajo a la izquierda)
# =====================================================
MARGIN_X = 40
TOP_Y = 800
BOTTOM_LIMIT = 70
ROW_H = 14
COLS = {"codigo": 40, "producto": 120, "moneda": 330, "cantidad": 420, "precio": 490, "subtotal": 560}
DESC_MAX_CHARS = 38
TEXT_COLOR = colors.HexColor("#1f2937")
HEADER_BG = colors.HexColor("#dbeafe")


def _fmt_desc(text: str) -> str:
    s = (text or "").strip()
    return s if len(s) <= DESC_MAX_CHARS else s[: DESC_MAX_CHARS - 1] + "…"


def generar_pdf_seleccion(lines: list[CartLine], rates: ExchangeRates, out_dir: str,
                          titulo: str = "Productos Seleccionados") -> str:
    """
    PDF de la lista seleccionada con precios a la cotización actual.
    Devuelve la ruta del archivo generado.
    """
    os.makedirs(out_dir, exist_ok=True)
    now = datetime.datetime.now()
    out_path = os.path.join(out_dir, f"seleccion_{now.strftime('%Y%m%d_%H%M%S')}.pdf")

    pricing = price_cart(lines, rates)

    c = canvas.Canvas(out_path, pagesize=A4)
    c.setTitle(titulo)
    W, _H = A4

    def draw_header(page: int) -> float:
        c.setFillColor(TEXT_COLOR)
        c.setFont("Helvetica-Bold", 16)
        c.drawString(MARGIN_X, TOP_Y, titulo)
        c.setFont("Helvetica", 9)
        c.drawRightString(W - MARGIN_X, TOP_Y, f"{now.strftime('%d/%m/%Y %H:%M')}  -  pág. {page}")
        c.drawString(
            MARGIN_X, TOP_Y - 16,
            f"USD Billete: {fmt_rate(rates.rate_billete)}    USD Divisas: {fmt_rate(rates.rate_divisas)}",
        )

        y = TOP_Y - 44
        c.setFillColor(HEADER_BG)
        c.rect(MARGIN_X - 4, y - 4, W - 2 * MARGIN_X + 8, ROW_H + 2, stroke=0, fill=1)
        c.setFillColor(TEXT_COLOR)
        c.setFont("Helvetica-Bold", 9)
        c.drawString(COLS["codigo"], y, "CÓDIGO")
        c.drawString(COLS["producto"], y, "DESCRIPCIÓN")
        c.drawString(COLS["moneda"], y, "MONEDA")
        c.drawRightString(COLS["cantidad"] + 30, y, "CANT.")
        c.drawRightString(COLS["precio"] + 40, y, "PRECIO")
        c.drawRightString(W - MARGIN_X, y, "SUBTOTAL")
        return y - ROW_H - 4

    page = 1
    y = draw_header(page)
    c.setFont("Helvetica", 9)

    for ln, lp in zip(lines, pricing.lines):
        if y < BOTTOM_LIMIT:
            c.showPage()
            page += 1
            y = draw_header(page)
            c.setFont("Helvetica", 9)

        c.drawString(COLS["codigo"], y, str(ln.code)[:14])
        c.drawString(COLS["producto"], y, _fmt_desc(ln.description))
        c.drawString(COLS["moneda"], y, currency_type_label(ln.currency))
        c.drawRightString(COLS["cantidad"] + 30, y, str(ln.quantity))
        c.drawRightString(COLS["precio"] + 40, y, fmt_money_ui(lp.unit_price))
        c.drawRightString(W - MARGIN_X, y, fmt_money_ui(lp.line_total))
        y -= ROW_H

    # Total
    if y < BOTTOM_LIMIT:
        c.showPage()
        page += 1
        y = draw_header(page)
    c.setStrokeColor(TEXT_COLOR)
    c.line(COLS["precio"] - 20, y + 6, W - MARGIN_X, y + 6)
    c.setFont("Helvetica-Bold", 11)
    c.drawRightString(COLS["precio"] + 40, y - 8, "TOTAL:")
    c.drawRightString(W - MARGIN_X, y - 8, fmt_money_ui(pricing.total))

    c.showPage()
    c.save()
    return out_path

"""
PATH: orders/services/invoice.py

INVOICE PDF (reportlab)

Layout (A4, single page, long orders continue on the next page):
- header: company block (left), FACTURE + number + date + status (right)
- billed-to / shipping address blocks
- item table: product (scent), qty, unit price, line total
- total
"""

from __future__ import annotations

from io import BytesIO

from django.utils import formats
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

COMPANY_NAME = "UNIKCANDLE"
COMPANY_LINES = (
    "123 Rue des Bougies",
    "75001 Paris, France",
    "contact@unikcandle.com",
)

STATUS_LABELS = {
    "PENDING": "En attente",
    "PROCESSING": "En préparation",
    "SHIPPED": "Expédiée",
    "DELIVERED": "Livrée",
    "CANCELLED": "Annulée",
}

PRIMARY = colors.HexColor("#333333")
MUTED = colors.HexColor("#999999")


def invoice_number(order) -> str:
    return str(order.id)[:8].upper()


def invoice_filename(order) -> str:
    return f"facture-{order.id}.pdf"


def _money(value) -> str:
    return f"{value:.2f} €"


def render_invoice_pdf(order) -> bytes:
    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    pdf.setTitle(f"Facture {invoice_number(order)}")
    width, height = A4
    left, right = 20 * mm, width - 20 * mm
    y = height - 20 * mm

    # ---------------- HEADER ----------------
    pdf.setFillColor(PRIMARY)
    pdf.setFont("Helvetica-Bold", 24)
    pdf.drawString(left, y, COMPANY_NAME)
    pdf.drawRightString(right, y, "FACTURE")

    pdf.setFont("Helvetica", 9)
    pdf.setFillColor(MUTED)
    line_y = y - 8 * mm
    for line in COMPANY_LINES:
        pdf.drawString(left, line_y, line)
        line_y -= 5 * mm

    pdf.drawRightString(right, y - 8 * mm, f"N°: {invoice_number(order)}")
    pdf.drawRightString(right, y - 13 * mm, f"Date: {formats.date_format(order.created_at, 'd/m/Y')}")
    pdf.drawRightString(right, y - 18 * mm, STATUS_LABELS.get(order.status, order.status))

    y -= 30 * mm
    pdf.setStrokeColor(PRIMARY)
    pdf.line(left, y, right, y)

    # ---------------- CUSTOMER ----------------
    y -= 10 * mm
    middle = left + 90 * mm
    pdf.setFont("Helvetica", 8)
    pdf.drawString(left, y, "FACTURÉ À")
    pdf.drawString(middle, y, "ADRESSE DE LIVRAISON")

    pdf.setFillColor(PRIMARY)
    pdf.setFont("Helvetica", 10)
    user = order.user
    pdf.drawString(left, y - 6 * mm, (getattr(user, "name", "") or "Client"))
    pdf.drawString(left, y - 11 * mm, getattr(user, "email", "") or "")

    address = getattr(order, "shipping_address", None)
    if address is not None:
        pdf.drawString(middle, y - 6 * mm, address.street)
        pdf.drawString(middle, y - 11 * mm, f"{address.zip_code} {address.city}")
        pdf.drawString(middle, y - 16 * mm, address.country)

    # ---------------- ITEMS ----------------
    y -= 30 * mm
    columns = (left, left + 100 * mm, left + 120 * mm)
    pdf.setFont("Helvetica-Bold", 9)
    pdf.drawString(columns[0], y, "Produit")
    pdf.drawString(columns[1], y, "Qté")
    pdf.drawString(columns[2], y, "Prix unitaire")
    pdf.drawRightString(right, y, "Total")
    y -= 3 * mm
    pdf.line(left, y, right, y)

    pdf.setFont("Helvetica", 9)
    for item in order.items.all():
        y -= 7 * mm
        if y < 30 * mm:
            pdf.showPage()
            pdf.setFont("Helvetica", 9)
            pdf.setFillColor(PRIMARY)
            y = height - 20 * mm

        label = item.product.name
        if item.scent_id:
            label = f"{label} ({item.scent.name})"
        pdf.drawString(columns[0], y, label[:60])
        pdf.drawString(columns[1], y, str(item.quantity))
        pdf.drawString(columns[2], y, _money(item.price))
        pdf.drawRightString(right, y, _money(item.line_total))

    # ---------------- TOTAL ----------------
    y -= 6 * mm
    pdf.line(left, y, right, y)
    y -= 8 * mm
    pdf.setFont("Helvetica-Bold", 12)
    pdf.drawString(columns[2], y, "TOTAL")
    pdf.drawRightString(right, y, _money(order.total))

    pdf.setFont("Helvetica", 8)
    pdf.setFillColor(MUTED)
    pdf.drawCentredString(width / 2, 15 * mm, "Merci pour votre commande !")

    pdf.showPage()
    pdf.save()
    return buffer.getvalue()

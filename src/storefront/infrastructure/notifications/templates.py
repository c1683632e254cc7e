"""Message bodies for order notifications.

Every interpolated value passes through ``html.escape``; customer names and
product names are user-controlled.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from html import escape
from urllib.parse import quote

from storefront.application.notifications import (
    AdminOrderEmail,
    AdminOrderWhatsApp,
    CustomerOrderWhatsApp,
    OrderConfirmationEmail,
)

SHOP_NAME = "Storefront"

_STYLE = """
  body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
  .container { max-width: 600px; margin: 0 auto; padding: 20px; border: 1px solid #ddd; border-radius: 5px; }
  .header { background-color: #005391; color: white; padding: 20px; border-radius: 5px; text-align: center; }
  .info { background-color: #f9f9f9; padding: 15px; border-radius: 5px; margin: 15px 0; }
  table { width: 100%; border-collapse: collapse; margin: 15px 0; }
  td, th { padding: 8px; border-bottom: 1px solid #ddd; }
  .total-row { font-weight: bold; background-color: #f0f0f0; }
  .button { display: inline-block; padding: 10px 20px; background-color: #005391; color: white; text-decoration: none; border-radius: 5px; }
  .footer { text-align: center; margin-top: 20px; font-size: 12px; color: #666; }
"""


def _money(amount: Decimal) -> str:
    return f"${amount:.2f}"


def _today() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


def confirmation_subject(event: OrderConfirmationEmail) -> str:
    return f"Order Confirmed - {SHOP_NAME} #{event.order_id}"


def confirmation_html(event: OrderConfirmationEmail, contact_whatsapp: str = "") -> str:
    rows = "".join(
        f"<tr><td>{escape(item.name)}</td>"
        f"<td style=\"text-align:center\">{escape(item.size)}</td>"
        f"<td style=\"text-align:center\">{item.quantity}</td>"
        f"<td style=\"text-align:right\">{_money(item.price_at_purchase)}</td></tr>"
        for item in event.items
    )
    contact = ""
    if contact_whatsapp:
        text = quote(f"Hi, I have a question about my order {event.order_id}")
        contact = (
            "<p><strong>Questions or changes?</strong> Contact us on WhatsApp:</p>"
            f"<a class=\"button\" href=\"https://wa.me/{escape(contact_whatsapp)}?text={text}\">"
            "Contact on WhatsApp</a>"
        )
    return f"""<!DOCTYPE html>
<html>
<head><meta charset="UTF-8"><style>{_STYLE}</style></head>
<body>
<div class="container">
  <div class="header"><h1>Order Confirmed!</h1><p>Thank you for shopping at {SHOP_NAME}</p></div>
  <p>Hi <strong>{escape(event.customer_name)}</strong>,</p>
  <p>Your order has been received. Here are the details:</p>
  <div class="info">
    <p><strong>Order number:</strong> {escape(event.order_id)}</p>
    <p><strong>Date:</strong> {_today()}</p>
    <p><strong>Email:</strong> {escape(event.recipient)}</p>
  </div>
  <table>
    <thead><tr><th>Product</th><th>Size</th><th>Quantity</th><th>Price</th></tr></thead>
    <tbody>
      {rows}
      <tr class="total-row"><td colspan="3" style="text-align:right">Total:</td>
      <td style="text-align:right">{_money(event.total)}</td></tr>
    </tbody>
  </table>
  <h3>Next steps</h3>
  <ol>
    <li>You will receive payment confirmation on WhatsApp</li>
    <li>We will arrange the delivery place and time with you</li>
    <li>Your order will be prepared and shipped</li>
  </ol>
  {contact}
  <div class="footer"><p>&copy; {SHOP_NAME}</p></div>
</div>
</body>
</html>"""


def admin_subject(event: AdminOrderEmail) -> str:
    return f"New Order - {SHOP_NAME} #{event.order_id}"


def admin_html(event: AdminOrderEmail) -> str:
    return f"""<!DOCTYPE html>
<html>
<head><meta charset="UTF-8"><style>{_STYLE}</style></head>
<body>
<div class="container">
  <div class="header"><h2>New order received!</h2></div>
  <div class="info">
    <p><strong>Order ID:</strong> {escape(event.order_id)}</p>
    <p><strong>Customer:</strong> {escape(event.customer_name)}</p>
    <p><strong>Phone:</strong> {escape(event.customer_phone or "N/A")}</p>
    <p><strong>Total:</strong> {_money(event.total)}</p>
    <p><strong>Date:</strong> {_today()}</p>
  </div>
  <p>Open the admin panel for details.</p>
</div>
</body>
</html>"""


def customer_whatsapp_text(event: CustomerOrderWhatsApp) -> str:
    return (
        f"Hi {event.customer_name}!\n\n"
        f"Your order #{event.order_id} has been confirmed.\n\n"
        f"Total: {_money(event.total)}\n\n"
        "We will contact you soon to arrange delivery.\n\n"
        "Questions? Reply to this message."
    )


def admin_whatsapp_text(event: AdminOrderWhatsApp) -> str:
    return (
        "New order received!\n\n"
        f"Customer: {event.customer_name}\n"
        f"Phone: {event.customer_phone or 'N/A'}\n"
        f"Order: #{event.order_id}\n"
        f"Total: {_money(event.total)}\n\n"
        "Open the admin panel for details."
    )

"""HTML email bodies for the consolidated summary and the single-medicine alert."""

from html import escape
from typing import Optional

from app.domain.calendar import format_display_date
from app.domain.models.medicine import Medicine

FOOTER = (
    '<hr style="border: 1px solid #eee;">'
    '<p style="color: #666; font-size: 14px;">This is an automated notification from your Medicine Expiry Tracker.</p>'
)

CELL = 'style="padding: 8px; border-bottom: 1px solid #eee;"'


def _test_mode_notice(test_recipient: Optional[str], original_recipient: str) -> str:
    if not test_recipient:
        return ""
    return f"""
    <div style="background-color: #fff3cd; color: #856404; padding: 10px; margin-bottom: 15px; border-radius: 4px; border: 1px solid #ffeeba;">
      <strong>Test Mode Notice:</strong> In test mode, all emails are sent to {escape(test_recipient)}.
      Original recipient would have been: {escape(original_recipient)}
    </div>"""


def _row(label: str, value) -> str:
    return f"<tr><td {CELL}><strong>{label}:</strong></td><td {CELL}>{escape(str(value))}</td></tr>"


def render_consolidated_email(message: str, recipient: str, test_recipient: Optional[str] = None) -> str:
    """Summary layout: the composed message inside a <pre> block."""
    return f"""
<div style="font-family: Arial, sans-serif; padding: 20px; background-color: #f5f5f5;">
  {_test_mode_notice(test_recipient, recipient)}
  <h2 style="color: #d9534f;">Medicine Expiry Summary</h2>
  <div style="background-color: white; padding: 15px; border-radius: 5px; margin: 15px 0;">
    <pre style="white-space: pre-wrap; font-family: Arial, sans-serif;">{escape(message)}</pre>
  </div>
  {FOOTER}
</div>
"""


def render_medicine_alert_email(
    message: str, medicine: Medicine, recipient: str, test_recipient: Optional[str] = None
) -> str:
    """Single-medicine layout: a details table followed by the message."""
    rows = [
        _row("Name", medicine.name),
        _row("Expiry Date", format_display_date(medicine.expiry_date)),
        _row("Quantity", medicine.quantity),
    ]
    if medicine.batch_number:
        rows.append(_row("Batch Number", medicine.batch_number))

    return f"""
<div style="font-family: Arial, sans-serif; padding: 20px; background-color: #f5f5f5;">
  {_test_mode_notice(test_recipient, recipient)}
  <h2 style="color: #d9534f;">Medicine Expiry Alert</h2>
  <div style="background-color: white; padding: 15px; border-radius: 5px; margin: 15px 0;">
    <h3 style="color: #333; margin-top: 0;">Medicine Details:</h3>
    <table style="width: 100%; border-collapse: collapse;">
      {"".join(rows)}
    </table>
  </div>
  <p style="font-size: 16px; color: #333; margin-top: 20px;">{escape(message)}</p>
  {FOOTER}
</div>
"""

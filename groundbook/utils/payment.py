from urllib.parse import quote, urlencode

from groundbook.core.config import settings


def format_amount(amount: float) -> str:
    amount = float(amount)
    if amount.is_integer():
        return str(int(amount))
    return f"{amount:.2f}"


def build_upi_link(upi_id: str | None, payee_name: str, amount: float) -> str:
    params = {
        "pa": upi_id or "",
        "pn": payee_name,
        "am": format_amount(amount),
        "tn": settings.UPI_TRANSACTION_NOTE,
        "cu": settings.UPI_CURRENCY,
    }
    return "upi://pay?" + urlencode(params, quote_via=quote, safe="@")


def build_qr_code_url(payload: str, size: int = 300) -> str:
    """Image URL on the third-party QR renderer encoding ``payload``."""
    query = urlencode({"size": f"{size}x{size}", "data": payload}, quote_via=quote, safe="")
    return f"{settings.QR_RENDER_URL}?{query}"

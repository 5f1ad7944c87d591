import requests

from app.core.config import settings

RESEND_EMAILS_URL = "https://api.resend.com/emails"


class EmailDeliveryError(Exception):
    pass


def send_otp_email(to_email: str, otp: str):
    if not settings.RESEND_API_KEY:
        raise EmailDeliveryError("RESEND_API_KEY not configured")

    payload = {
        "from": settings.RESEND_FROM_EMAIL,
        "to": [to_email],
        "subject": settings.OTP_EMAIL_SUBJECT,
        "text": f"Your OTP code is: {otp}",
    }

    headers = {
        "Authorization": f"Bearer {settings.RESEND_API_KEY}",
        "Content-Type": "application/json",
    }

    response = requests.post(RESEND_EMAILS_URL, json=payload, headers=headers, timeout=10)

    if response.status_code >= 400:
        raise EmailDeliveryError(f"Email sending failed: {response.text}")

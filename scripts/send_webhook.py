"""Post a sample Stripe failure event to a running paywatch server."""
import argparse, json, os, sys

import httpx

SAMPLES = {
    "payment_intent.payment_failed": {
        "amount": 2999,
        "currency": "usd",
        "customer": "cus_sample",
        "last_payment_error": {
            "code": "card_declined",
            "message": "Your card was declined.",
            "payment_method": {"type": "card"},
        },
    },
    "charge.failed": {
        "amount": 1500,
        "currency": "eur",
        "failure_code": "insufficient_funds",
        "failure_message": "Your card has insufficient funds.",
        "billing_details": {"name": "Sample Customer", "email": "sample@example.com"},
        "payment_method_details": {"type": "card"},
    },
    "invoice.payment_failed": {
        "amount_due": 4900,
        "currency": "usd",
        "customer_name": "Sample Customer",
        "customer_email": "sample@example.com",
    },
}

_p = argparse.ArgumentParser()
_p.add_argument("--url", default=f"http://localhost:{os.environ.get('PORT', '3000')}/webhook")
_p.add_argument("--type", default="payment_intent.payment_failed", help="Event type to send")
_p.add_argument("--amount", type=int, default=None, help="Override amount in minor units")
_args = _p.parse_args()

obj = dict(SAMPLES.get(_args.type, {"amount": 0}))
if _args.amount is not None:
    obj["amount"] = _args.amount
event = {"id": "evt_sample", "type": _args.type, "data": {"object": obj}}

try:
    resp = httpx.post(_args.url, content=json.dumps(event), headers={"Content-Type": "application/json"}, timeout=60)
except httpx.HTTPError as e:
    print(f"Request failed: {e}")
    sys.exit(1)

print(f"{resp.status_code} {resp.text}")
sys.exit(0 if resp.is_success else 1)

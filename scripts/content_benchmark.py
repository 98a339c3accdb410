"""Compare models on alert content for the same failed payment."""
import asyncio, json, time, os, sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from paywatch.content import AlertContentGenerator
from paywatch.logbuffer import LogBuffer
from paywatch.models import manual_test_payment

MODELS = [
    "gpt-3.5-turbo",
    "gpt-4o-mini",
    "gpt-4o",
]


async def run_model(model, payment):
    logs = LogBuffer()
    gen = AlertContentGenerator(logs, model=model, api_key=os.environ.get("OPENAI_API_KEY"))
    t0 = time.time()
    content, enriched = await gen.generate_with_source(payment)
    return {
        "model": model,
        "enriched": enriched,
        "elapsed_s": round(time.time() - t0, 2),
        "subject": content.subject,
        "body_chars": len(content.body),
        "error": logs.last().data if not enriched else None,
    }


async def main():
    payment = manual_test_payment()
    models = sys.argv[1:] or MODELS
    results = [await run_model(m, payment) for m in models]
    print(json.dumps(results, indent=2, ensure_ascii=False))


asyncio.run(main())

# Nombre de archivo: metrics.py
# Ubicación de archivo: faq_bot/app/metrics.py
# Descripción: Exposición de métricas Prometheus para el bot de FAQ

from __future__ import annotations

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    CONTENT_TYPE_LATEST,
    generate_latest,
)

REGISTRY = CollectorRegistry()


def _build() -> tuple[Counter, Counter, Counter, Histogram]:
    return (
        Counter(
            "faq_bot_webhook_requests_total",
            "Total de llamadas al webhook con firma válida",
            registry=REGISTRY,
        ),
        Counter(
            "faq_bot_match_outcomes_total",
            "Resultados del matcher por tipo",
            ["outcome"],
            registry=REGISTRY,
        ),
        Counter(
            "faq_bot_reply_failures_total",
            "Respuestas que LINE no aceptó",
            registry=REGISTRY,
        ),
        Histogram(
            "faq_bot_answer_latency_seconds",
            "Tiempo en segundos para elegir la respuesta (incluye lectura de la hoja)",
            registry=REGISTRY,
        ),
    )


WEBHOOK_COUNT, OUTCOME_COUNT, REPLY_FAILURES, ANSWER_LATENCY = _build()


def record_webhook() -> None:
    WEBHOOK_COUNT.inc()


def record_answer(outcome: str, latency: float) -> None:
    """Registra el resultado de un mensaje y su latencia."""
    OUTCOME_COUNT.labels(outcome=outcome).inc()
    ANSWER_LATENCY.observe(latency)


def record_reply_failure() -> None:
    REPLY_FAILURES.inc()


def export_metrics() -> bytes:
    """Devuelve las métricas en formato Prometheus."""
    return generate_latest(REGISTRY)


def reset_metrics() -> None:
    """Restablece los contadores; se usa solo en las pruebas."""
    global WEBHOOK_COUNT, OUTCOME_COUNT, REPLY_FAILURES, ANSWER_LATENCY
    for collector in (WEBHOOK_COUNT, OUTCOME_COUNT, REPLY_FAILURES, ANSWER_LATENCY):
        REGISTRY.unregister(collector)
    WEBHOOK_COUNT, OUTCOME_COUNT, REPLY_FAILURES, ANSWER_LATENCY = _build()


__all__ = [
    "record_webhook",
    "record_answer",
    "record_reply_failure",
    "export_metrics",
    "reset_metrics",
    "CONTENT_TYPE_LATEST",
]

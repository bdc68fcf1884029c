# ==============================================================================
# Load Testing Summary
# ==============================================================================
"""
Resumen final de la prueba de carga.

Calcula las métricas clave y las presenta en tres formatos:
- Bloque de texto para consola
- Anotaciones de GitHub Actions (::group::, ::warning::, ::notice::)
- Reporte HTML que queda como artefacto

Una métrica ausente se muestra como "N/A"; la tasa de errores
ausente se toma como "0.00".
"""

import html
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from tests.load.config import PerformanceThreshold, THRESHOLDS

NOT_AVAILABLE = "N/A"


def _fmt(value: Optional[float]) -> str:
    # 0 también cuenta como ausente: no hubo tiempos que promediar
    return f"{value:.2f}" if value else NOT_AVAILABLE


@dataclass
class LoadSummary:
    """
    Métricas agregadas de una ejecución.

    Attributes:
        endpoint: URL completa probada
        duration_seconds: Duración configurada
        rate: Requests por segundo configurados
        total_requests: Requests ejecutados
        expected_requests: rate × duración, o None si no se conoce
        error_rate: Fracción de requests fallidos (0-1) o None
        avg_ms: Tiempo promedio o None
        p95_ms: Percentil 95 o None
        checks: Pasadas/fallidas por check
    """

    endpoint: str
    duration_seconds: int
    rate: int
    total_requests: int = 0
    expected_requests: Optional[int] = None
    error_rate: Optional[float] = None
    avg_ms: Optional[float] = None
    p95_ms: Optional[float] = None
    checks: Dict[str, Dict[str, int]] = field(default_factory=dict)
    thresholds: PerformanceThreshold = field(default_factory=lambda: THRESHOLDS)

    @classmethod
    def from_counts(
        cls,
        endpoint: str,
        duration_seconds: int,
        rate: int,
        total_requests: int,
        failed_requests: int,
        avg_ms: Optional[float],
        p95_ms: Optional[float],
        checks: Optional[Dict[str, Dict[str, int]]] = None,
        expected_requests: Optional[int] = None,
    ) -> "LoadSummary":
        error_rate = failed_requests / total_requests if total_requests else None
        return cls(
            endpoint=endpoint,
            duration_seconds=duration_seconds,
            rate=rate,
            total_requests=total_requests,
            expected_requests=expected_requests,
            error_rate=error_rate,
            avg_ms=avg_ms if total_requests else None,
            p95_ms=p95_ms if total_requests else None,
            checks=checks or {},
        )

    # ==========================================================================
    # VALORES PRESENTADOS
    # ==========================================================================

    @property
    def total_text(self) -> str:
        """Total ejecutado y, si se conoce, el esperado por el ritmo."""
        if self.expected_requests is None:
            return str(self.total_requests)
        return f"{self.total_requests} (esperadas: {self.expected_requests})"

    @property
    def error_rate_text(self) -> str:
        if self.error_rate is None:
            return "0.00"
        return f"{self.error_rate * 100:.2f}"

    @property
    def avg_text(self) -> str:
        return _fmt(self.avg_ms)

    @property
    def p95_text(self) -> str:
        return _fmt(self.p95_ms)

    # ==========================================================================
    # THRESHOLDS
    # ==========================================================================

    @property
    def stable(self) -> bool:
        """Tasa de errores por debajo del umbral."""
        return float(self.error_rate_text) < self.thresholds.error_rate_pct

    @property
    def latency_ok(self) -> bool:
        """p95 por debajo del umbral; sin p95 no se puede dar por bueno."""
        return self.p95_text != NOT_AVAILABLE and float(self.p95_text) < self.thresholds.p95_ms

    @property
    def passed(self) -> bool:
        return self.stable and self.latency_ok

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1


# ==============================================================================
# RENDERERS
# ==============================================================================

RULE = "═" * 62


def render_console(summary: LoadSummary) -> str:
    t = summary.thresholds
    lines = [
        "",
        RULE,
        "📘 RESULTADOS DEL TEST DE PERFORMANCE",
        RULE,
        "🔹 Endpoint probado:",
        f"   {summary.endpoint}",
        "",
        "🔹 Escenario:",
        f"   - Duración: {summary.duration_seconds} segundos",
        f"   - Frecuencia: {summary.rate} peticiones por segundo",
        f"   - Total de peticiones: {summary.total_text}",
        "",
        "🔹 Resultados:",
        f"   - Tasa de errores: {summary.error_rate_text}%  (esperado < {t.error_rate_pct:g}%)",
        f"   - Tiempo promedio: {summary.avg_text} ms",
        f"   - Percentil 95: {summary.p95_text} ms  (esperado < {t.p95_ms:g} ms)",
    ]

    if summary.checks:
        lines += ["", "🔹 Checks:"]
        for name, result in summary.checks.items():
            total = result["passes"] + result["fails"]
            lines.append(f"   - {name}: {result['passes']}/{total}")

    lines += [
        "",
        "🔹 Conclusión:",
        "   ✅ Estable y sin errores significativos."
        if summary.stable else "   ⚠️ Hubo fallas o lentitud.",
        "   ✅ Buen tiempo de respuesta general."
        if summary.latency_ok else "   ⚠️ El servicio responde más lento de lo esperado.",
        "",
        RULE,
    ]
    return "\n".join(lines)


def render_github_annotations(summary: LoadSummary, name: str = "invoices") -> List[str]:
    """
    Líneas que GitHub Actions muestra agrupadas y como anotaciones.

    Un p95 ausente no se anota como warning: se informa como notice.
    """
    t = summary.thresholds
    expected = NOT_AVAILABLE if summary.expected_requests is None else summary.expected_requests
    lines = [
        f"::group::Resumen carga – {name}",
        f"endpoint={summary.endpoint}",
        f"total_reqs={summary.total_requests}",
        f"expected_reqs={expected}",
        f"avg_ms={summary.avg_text}",
        f"p95_ms={summary.p95_text}",
        f"error_rate={summary.error_rate_text}%",
    ]

    if summary.stable:
        lines.append(f"::notice::Tasa de errores dentro del objetivo (<{t.error_rate_pct:g}%)")
    else:
        lines.append(f"::warning::La tasa de errores fue mayor o igual al {t.error_rate_pct:g}%")

    if summary.p95_text != NOT_AVAILABLE and not summary.latency_ok:
        lines.append(f"::warning::El p95 estuvo por encima de {t.p95_ms:g}ms")
    else:
        lines.append(f"::notice::p95 dentro del objetivo (<{t.p95_ms:g}ms)")

    lines.append("::endgroup::")
    return lines


_HTML_STYLE = """
    body { font-family: Arial, sans-serif; background: #f9f9f9; color: #333; margin: 2rem; }
    h1 { color: #2e7d32; }
    .card { background: white; padding: 1.5rem 2rem; margin-bottom: 1rem;
            border-radius: 8px; box-shadow: 0 2px 6px rgba(0,0,0,.1); }
    table { width: 100%; border-collapse: collapse; margin-top: 1rem; }
    th, td { padding: .6rem .8rem; border-bottom: 1px solid #eee; text-align: left; }
    th { background: #fafafa; }
    .ok { color: #2e7d32; font-weight: bold; }
    .warn { color: #c62828; font-weight: bold; }
"""


def render_html(summary: LoadSummary, command: str = "locust -f tests/load/locustfile.py") -> str:
    t = summary.thresholds
    endpoint = html.escape(summary.endpoint)

    check_rows = "".join(
        f"<tr><td>{html.escape(name)}</td><td>{r['passes']}</td><td>{r['fails']}</td></tr>"
        for name, r in summary.checks.items()
    )
    checks_card = (
        '<div class="card"><h2>Checks</h2><table>'
        "<tr><th>Check</th><th>Pasadas</th><th>Fallidas</th></tr>"
        f"{check_rows}</table></div>"
        if summary.checks else ""
    )

    stable = (
        '<span class="ok">✔ El servicio fue estable y sin errores graves.</span>'
        if summary.stable
        else '<span class="warn">✖ Se detectaron errores durante la ejecución.</span>'
    )
    latency = (
        '<span class="ok">✔ Los tiempos de respuesta fueron aceptables.</span>'
        if summary.latency_ok
        else '<span class="warn">✖ El servicio respondió más lento de lo esperado.</span>'
    )

    return f"""<!DOCTYPE html>
<html lang="es">
<head>
  <meta charset="UTF-8" />
  <title>Reporte de Performance - API de facturas</title>
  <style>{_HTML_STYLE}</style>
</head>
<body>
  <h1>Reporte de Performance - API de facturas</h1>

  <div class="card">
    <h2>Resumen de la prueba</h2>
    <p><strong>Endpoint:</strong> {endpoint}</p>
    <p><strong>Duración:</strong> {summary.duration_seconds} segundos</p>
    <p><strong>Frecuencia:</strong> {summary.rate} peticiones por segundo</p>
    <p><strong>Total de peticiones:</strong> {summary.total_text}</p>
  </div>

  <div class="card">
    <h2>Métricas principales</h2>
    <table>
      <tr><th>Métrica</th><th>Valor</th><th>Objetivo</th></tr>
      <tr><td>Tasa de errores</td><td>{summary.error_rate_text}%</td><td>&lt; {t.error_rate_pct:g}%</td></tr>
      <tr><td>Promedio (ms)</td><td>{summary.avg_text}</td><td>-</td></tr>
      <tr><td>p95 (ms)</td><td>{summary.p95_text}</td><td>&lt; {t.p95_ms:g}</td></tr>
    </table>
  </div>
  {checks_card}
  <div class="card">
    <h2>Conclusión</h2>
    <p>{stable}</p>
    <p>{latency}</p>
  </div>

  <div class="card">
    <h2>Comando usado</h2>
    <code>{html.escape(command)}</code>
  </div>
</body>
</html>
"""


def write_report(summary: LoadSummary, path: Path) -> Path:
    """Escribe el HTML creando el directorio si no existe."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_html(summary), encoding="utf-8")
    return path


def render_stdout(summary: LoadSummary) -> str:
    """Consola más anotaciones cuando corre en GitHub Actions."""
    text = render_console(summary)
    if os.getenv("GITHUB_ACTIONS"):
        text += "\n" + "\n".join(render_github_annotations(summary)) + "\n"
    return text

"""
Landing page endpoint
"""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

router = APIRouter()

LANDING_PAGE = """<html>
<head><title>Nuki Exporter</title></head>
<body>
<h1>Nuki Exporter</h1>
<p><a href='{metrics_path}'>Metrics</a></p>
</body>
</html>"""


@router.get("/", response_class=HTMLResponse)
def landing_page(request: Request):
    """Static page pointing at the metrics path"""
    return LANDING_PAGE.format(metrics_path=request.app.state.settings.metrics_path)

"""Root landing page with the API base URL and documentation links."""

from html import escape


def render_root_page(app_name: str) -> str:
    """Return HTML for the root landing page."""
    name = escape(app_name)
    return f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{name}</title>
    <style>
        body {{
            font-family: system-ui, sans-serif;
            margin: 0;
            background: #f7f5f0;
            color: #222;
            padding: 2rem 1rem;
        }}
        .wrap {{ max-width: 560px; margin: 0 auto; }}
        h1 {{ font-weight: 600; margin: 0 0 0.5rem 0; }}
        .tagline {{ color: #777; margin: 0 0 2rem 0; }}
        .card {{
            background: #fff;
            border: 1px solid #e4e0d8;
            padding: 1.5rem 1.75rem;
            margin-bottom: 1.25rem;
        }}
        code, .code {{ font-family: ui-monospace, monospace; font-size: 0.875rem; }}
        .code {{ background: #f2efe9; padding: 0.6rem 0.85rem; margin: 0.5rem 0 1rem 0; }}
        a.btn {{
            display: inline-block;
            padding: 0.6rem 1.2rem;
            margin-right: 0.5rem;
            background: #222;
            color: #fff;
            text-decoration: none;
        }}
    </style>
</head>
<body>
    <div class="wrap">
        <h1>{name}</h1>
        <p class="tagline">Villas, boats, clients, offers and bookings, per company.</p>
        <section class="card">
            <p>API routes live under <code>/api/v1</code>. Every company-scoped request
            carries the <code>X-Company-ID</code> header.</p>
            <div class="code" id="api-base">-</div>
            <p>Run locally with:</p>
            <div class="code">DATABASE_BACKEND=memory STORAGE_BACKEND=memory uvicorn concierge.main:app --reload</div>
            <a href="/docs" class="btn">API docs (Swagger)</a>
            <a href="/redoc" class="btn">ReDoc</a>
        </section>
    </div>
    <script>
        (function () {{
            var el = document.getElementById('api-base');
            if (el) el.textContent = window.location.origin + '/api/v1';
        }})();
    </script>
</body>
</html>
""".strip()

"""QR code page for joining a session."""

import base64
from html import escape
from io import BytesIO

import qrcode


def build_qr_data_url(url: str) -> str:
    """Render ``url`` as a PNG QR code and return it as a data URL."""
    image = qrcode.make(url)
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    encoded = base64.b64encode(buffer.getvalue()).decode("utf-8")
    return f"data:image/png;base64,{encoded}"


def render_qr_page(base_url: str, session_id: str) -> str:
    """Return the HTML page showing the join QR code for a session."""
    join_url = f"{base_url.rstrip('/')}/{session_id}"
    data_url = build_qr_data_url(join_url)
    safe_id = escape(session_id)
    return _QR_PAGE_HTML.format(
        data_url=data_url,
        join_url=escape(join_url),
        session_id=safe_id,
    )


_QR_PAGE_HTML = """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>QR Code - Song Requests</title>
    <script src="https://cdn.tailwindcss.com"></script>
  </head>
  <body class="bg-gray-100 min-h-screen flex items-center justify-center p-4">
    <div class="bg-white rounded-lg shadow-lg p-8 text-center max-w-md w-full">
      <h1 class="text-2xl font-bold text-gray-800 mb-4">Song Request QR Code</h1>
      <div class="mb-4">
        <img src="{data_url}" alt="QR Code" class="mx-auto">
      </div>
      <p class="text-gray-600 mb-2">Scan this QR code to submit a song request</p>
      <p class="text-gray-400 text-sm mb-4">{join_url}</p>
      <a href="/admin/{session_id}"
         class="inline-block bg-blue-500 text-white px-4 py-2 rounded">
        Go to Admin Dashboard
      </a>
    </div>
  </body>
</html>
"""

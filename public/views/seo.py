"""
PATH: public/views/seo.py

- GET /manifest.webmanifest   web app manifest
- GET /robots.txt             crawl rules + sitemap location
(/sitemap.xml is served by django.contrib.sitemaps, see public/sitemaps.py)
"""

from __future__ import annotations

from django.conf import settings
from django.http import HttpResponse, JsonResponse
from django.views.decorators.http import require_GET

MANIFEST = {
    "name": "UNIKCANDLE - Bougies personnalisées et écologiques",
    "short_name": "UNIKCANDLE",
    "description": (
        "Découvrez UNIKCANDLE, des bougies uniques et personnalisables avec messages "
        "audio intégrés. Créez votre bougie unique à partir de bouteilles recyclées."
    ),
    "start_url": "/",
    "scope": "/",
    "display": "standalone",
    "background_color": "#ffffff",
    "theme_color": "#d97706",
    "orientation": "portrait-primary",
    "lang": "fr",
    "dir": "ltr",
    "categories": ["shopping", "lifestyle"],
    "icons": [
        {"src": "/icon-192.png", "sizes": "192x192", "type": "image/png", "purpose": "maskable"},
        {"src": "/icon-512.png", "sizes": "512x512", "type": "image/png", "purpose": "any"},
        {"src": "/apple-icon.png", "sizes": "180x180", "type": "image/png"},
    ],
}

ROBOTS_DISALLOW = ("/api/", "/admin/")


@require_GET
def manifest(request):
    return JsonResponse(
        MANIFEST,
        content_type="application/manifest+json",
        json_dumps_params={"ensure_ascii": False},
    )


@require_GET
def robots_txt(request):
    lines = ["User-agent: *", "Allow: /"]
    lines += [f"Disallow: {path}" for path in ROBOTS_DISALLOW]
    lines += ["", f"Sitemap: {request.build_absolute_uri('/sitemap.xml')}"]
    return HttpResponse("\n".join(lines) + "\n", content_type="text/plain")

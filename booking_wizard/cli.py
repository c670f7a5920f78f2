"""
Write the SPA rewrite .htaccess into a built frontend directory.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

HTACCESS_TEMPLATE = """RewriteEngine On
RewriteBase {base}/

# Serve index.html for client-side routes
RewriteCond %{{REQUEST_FILENAME}} !-f
RewriteCond %{{REQUEST_FILENAME}} !-d
RewriteRule . {base}/index.html [L]

# Cache static assets
<IfModule mod_expires.c>
    ExpiresActive on
    ExpiresByType text/css "access plus 1 year"
    ExpiresByType application/javascript "access plus 1 year"
    ExpiresByType image/png "access plus 1 year"
    ExpiresByType image/jpg "access plus 1 year"
    ExpiresByType image/jpeg "access plus 1 year"
    ExpiresByType image/gif "access plus 1 year"
    ExpiresByType image/svg+xml "access plus 1 year"
</IfModule>

# Gzip compression
<IfModule mod_deflate.c>
    AddOutputFilterByType DEFLATE text/plain
    AddOutputFilterByType DEFLATE text/html
    AddOutputFilterByType DEFLATE text/xml
    AddOutputFilterByType DEFLATE text/css
    AddOutputFilterByType DEFLATE application/xml
    AddOutputFilterByType DEFLATE application/xhtml+xml
    AddOutputFilterByType DEFLATE application/rss+xml
    AddOutputFilterByType DEFLATE application/javascript
    AddOutputFilterByType DEFLATE application/x-javascript
</IfModule>
"""


def render_htaccess(subdirectory: str = "") -> str:
    """Render the .htaccess body for an app served from ``/subdirectory``."""
    subdirectory = subdirectory.strip("/")
    base = f"/{subdirectory}" if subdirectory else ""
    return HTACCESS_TEMPLATE.format(base=base)


def write_htaccess(dist: Path, subdirectory: str = "") -> bool:
    """Write ``dist/.htaccess``; returns False when ``dist`` does not exist."""
    if not dist.is_dir():
        return False
    (dist / ".htaccess").write_text(render_htaccess(subdirectory), encoding="utf-8")
    return True


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create the SPA .htaccess for shared hosting")
    parser.add_argument("subdirectory", nargs="?", default="", help="Path the app is served under")
    parser.add_argument("--dist", default="dist", help="Built frontend directory")
    args = parser.parse_args(argv)

    dist = Path(args.dist)
    subdirectory = args.subdirectory.strip("/")

    if not write_htaccess(dist, subdirectory):
        print(f"{dist} folder not found. Build the frontend first.")
        return 0

    print(f".htaccess file created successfully in {dist}")
    if subdirectory:
        print(f"Configured for subdirectory: /{subdirectory}")
    else:
        print("Configured for root domain deployment")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""Page-global presentation for rendered post bodies: typography and the image lightbox."""

import logging

logger = logging.getLogger(__name__)

MARKDOWN_STYLES_ID = "markdown-styles"
LIGHTBOX_ID = "img-lightbox"
LIGHTBOX_IMAGE_ID = "img-lightbox-img"

MARKDOWN_STYLES = """
.post-content h1, .post-content h2, .post-content h3,
.post-content h4, .post-content h5, .post-content h6 {
    color: var(--neon-blue);
    margin-top: 2rem;
    margin-bottom: 1rem;
    border-bottom: 1px solid var(--border-color);
    padding-bottom: 0.5rem;
}
.post-content h1 { font-size: 2rem; }
.post-content h2 { font-size: 1.75rem; }
.post-content h3 { font-size: 1.5rem; }
.post-content h4 { font-size: 1.25rem; }
.post-content p { margin-bottom: 1.5rem; line-height: 1.7; color: var(--text-secondary); }
.post-content code {
    background: var(--tertiary-bg);
    color: var(--neon-green);
    padding: 0.2rem 0.4rem;
    border-radius: 4px;
    font-family: var(--font-mono);
    font-size: 0.9em;
}
.post-content pre {
    background: var(--card-bg);
    border: 1px solid var(--border-color);
    border-radius: var(--radius-md);
    padding: 1.5rem;
    overflow-x: auto;
    margin: 1.5rem 0;
}
.post-content pre code { background: none; color: var(--text-primary); padding: 0; font-size: 0.875rem; line-height: 1.5; }
.post-content blockquote {
    border-left: 4px solid var(--neon-blue);
    background: var(--card-bg);
    padding: 1rem 1.5rem;
    margin: 1.5rem 0;
    border-radius: 0 var(--radius-md) var(--radius-md) 0;
}
.post-content blockquote p { margin: 0; color: var(--text-primary); font-style: italic; }
.post-content ul, .post-content ol { margin: 1.5rem 0; padding-left: 2rem; }
.post-content li { margin-bottom: 0.5rem; color: var(--text-secondary); }
.post-content a { color: var(--neon-blue); text-decoration: none; border-bottom: 1px solid transparent; }
.post-content a:hover { border-bottom-color: var(--neon-blue); }
.post-content img {
    max-width: 100%;
    height: auto;
    border-radius: var(--radius-md);
    margin: 1.5rem 0;
    box-shadow: var(--shadow-md);
}
.post-content table { width: 100%; border-collapse: collapse; margin: 1.5rem 0; background: var(--card-bg); }
.post-content th, .post-content td { padding: 0.75rem; text-align: left; border-bottom: 1px solid var(--border-color); }
.post-content th { background: var(--tertiary-bg); color: var(--neon-blue); font-weight: 600; }
.post-content hr {
    border: none;
    height: 2px;
    background: linear-gradient(90deg, transparent, var(--neon-blue), transparent);
    margin: 2rem 0;
}
"""

LIGHTBOX_MARKUP = f"""
<div id="{LIGHTBOX_ID}" style="position: fixed; inset: 0; background: rgba(0,0,0,0.85); display: none; align-items: center; justify-content: center; z-index: 2000">
  <img id="{LIGHTBOX_IMAGE_ID}" src="" alt="" style="max-width: 90%; max-height: 90%; border-radius: 12px; box-shadow: 0 10px 30px rgba(0,0,0,0.5)">
</div>
<script>
(function () {{
  var overlay = document.getElementById("{LIGHTBOX_ID}");
  var preview = document.getElementById("{LIGHTBOX_IMAGE_ID}");
  function close() {{ overlay.style.display = "none"; preview.src = ""; }}
  document.addEventListener("click", function (event) {{
    var img = event.target.closest && event.target.closest("img[data-lightbox]");
    if (!img || !img.src) return;
    preview.src = img.src;
    overlay.style.display = "flex";
  }});
  overlay.addEventListener("click", close);
  document.addEventListener("keydown", function (event) {{
    if (event.key === "Escape") close();
  }});
}})();
</script>
"""


def install_markdown_styles(document) -> None:
    document.append_style(MARKDOWN_STYLES_ID, MARKDOWN_STYLES)
    logger.debug("Installed markdown styles")


def install_lightbox(document) -> None:
    document.append_to_body(LIGHTBOX_MARKUP)
    logger.debug("Installed image lightbox overlay")

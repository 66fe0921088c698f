"""Text preprocessing for BM25 keyword search."""

from __future__ import annotations

import re
import unicodedata

from resume_rag.config.constants import STOPWORDS

# Technology names whose punctuation carries meaning on a résumé.
_PROTECTED_TERMS = {
    "c++": "cplusplus",
    "c#": "csharp",
    "f#": "fsharp",
    ".net": "dotnet",
    "node.js": "nodejs",
    "next.js": "nextjs",
    "vue.js": "vuejs",
}
_PROTECTED_RE = re.compile(
    "|".join(re.escape(term) for term in sorted(_PROTECTED_TERMS, key=len, reverse=True))
)


def tokenize(text: str) -> list[str]:
    """Lowercase, keep known tech names intact, strip punctuation, drop stopwords."""
    text = unicodedata.normalize("NFKC", text).lower()
    text = _PROTECTED_RE.sub(lambda m: f" {_PROTECTED_TERMS[m.group(0)]} ", text)
    text = re.sub(r"[^\w\s]", " ", text)
    return [t for t in text.split() if t not in STOPWORDS and len(t) > 1]

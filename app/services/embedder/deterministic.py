"""
Deterministic fake embeddings. The vector is a pure function of the text:
seed = first 8 bytes (big-endian) of SHA-256(text, UTF-8), fed to random.Random
(Mersenne Twister), which draws `dimension` values uniformly in [-1, 1].
The vector is then L2-normalized and stored as float32.
"""

import hashlib
import random
from array import array

from app.services.embedder.normalization import l2_normalize

DEFAULT_DIMENSION = 1536


def text_seed(text: str) -> int:
    """64-bit seed for the text. The empty string hashes like any other text."""
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


def generate_embedding(text: str, dimension: int = DEFAULT_DIMENSION) -> list[float]:
    rng = random.Random(text_seed(text))
    vec = [rng.uniform(-1.0, 1.0) for _ in range(dimension)]
    return array("f", l2_normalize(vec)).tolist()

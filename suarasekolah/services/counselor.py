"""AI Konselor reply selection.

Replies come from a fixed lookup table: the prompt is lowercased and checked
against keyword groups in priority order, and the first group that matches
wins. Prompts matching no group get a random pick from a small fallback pool.
No conversation history is consulted.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod

from suarasekolah.core import config

GREETING_TEMPLATE = (
    "Halo! Saya adalah AI Konselor {school}. Saya di sini untuk membantu Anda dengan "
    "berbagai masalah akademik, sosial, atau personal. Apa yang bisa saya bantu hari ini?"
)

STRESS_REPLY = (
    "Saya memahami bahwa Anda sedang mengalami stress. Ini adalah respons normal terhadap "
    "tekanan. Mari kita bicarakan tentang strategi untuk mengelola stress ini. Apa yang "
    "biasanya membuat Anda merasa lebih tenang?"
)
GRADES_REPLY = (
    "Kekhawatiran tentang nilai dan ujian sangat umum dialami siswa. Ingatlah bahwa nilai "
    "bukan satu-satunya ukuran kemampuan Anda. Mari kita diskusikan strategi belajar yang "
    "efektif dan cara mengelola kecemasan ujian."
)
SOCIAL_REPLY = (
    "Hubungan sosial memang bisa menjadi tantangan. Setiap orang memiliki cara berbeda dalam "
    "berinteraksi. Mari kita bahas tentang cara membangun hubungan yang sehat dan mengatasi "
    "konflik dengan teman."
)
FAMILY_REPLY = (
    "Dinamika keluarga bisa kompleks, terutama di masa remaja. Komunikasi yang terbuka dan "
    "saling pengertian sangat penting. Bagaimana hubungan Anda dengan keluarga saat ini?"
)

# Checked in order; the first group with a keyword contained in the prompt wins.
KEYWORD_RULES: list[tuple[tuple[str, ...], str]] = [
    (("stress", "tertekan"), STRESS_REPLY),
    (("nilai", "ujian"), GRADES_REPLY),
    (("teman", "sosial"), SOCIAL_REPLY),
    (("keluarga", "orangtua"), FAMILY_REPLY),
]

FALLBACK_REPLIES: list[str] = [
    "Terima kasih telah berbagi dengan saya. Saya memahami bahwa ini mungkin situasi yang "
    "menantang untuk Anda. Mari kita bahas lebih lanjut.",
    "Saya mendengar kekhawatiran Anda. Ini adalah hal yang wajar dirasakan oleh banyak siswa. "
    "Bagaimana perasaan Anda saat ini?",
    "Itu adalah langkah yang baik untuk mencari bantuan. Saya di sini untuk mendukung Anda. "
    "Apakah ada hal spesifik yang ingin Anda diskusikan?",
    "Saya memahami situasi Anda. Mari kita cari solusi bersama-sama. Apa yang menurut Anda "
    "bisa membantu dalam situasi ini?",
    "Terima kasih sudah mempercayai saya. Perasaan yang Anda alami sangat valid. Mari kita "
    "eksplorasi lebih dalam tentang hal ini.",
]


def greeting() -> str:
    return GREETING_TEMPLATE.format(school=config.SCHOOL_NAME)


def match_keyword_reply(prompt: str) -> str | None:
    """Return the canned reply of the first keyword group found in the prompt."""
    lowered = prompt.lower()
    for keywords, reply in KEYWORD_RULES:
        if any(keyword in lowered for keyword in keywords):
            return reply
    return None


def select_response(prompt: str, rng: random.Random | None = None) -> str:
    """Pick the counselor reply for a prompt."""
    reply = match_keyword_reply(prompt)
    if reply is not None:
        return reply
    return (rng or random).choice(FALLBACK_REPLIES)


class Responder(ABC):
    """Produces a counselor reply for a single prompt."""

    @abstractmethod
    def reply(self, prompt: str) -> str:
        pass


class KeywordResponder(Responder):
    def __init__(self, rng: random.Random | None = None):
        self.rng = rng

    def reply(self, prompt: str) -> str:
        return select_response(prompt, rng=self.rng)


def get_responder() -> Responder:
    """Build the responder selected by COUNSELOR_BACKEND."""
    backend = config.COUNSELOR_BACKEND.lower()
    if backend == "keyword":
        return KeywordResponder()
    if backend == "llm":
        from suarasekolah.services.llm import LLMResponder

        return LLMResponder(fallback=KeywordResponder())
    raise ValueError(
        f"Unsupported COUNSELOR_BACKEND={config.COUNSELOR_BACKEND!r}. "
        "Supported: keyword, llm"
    )

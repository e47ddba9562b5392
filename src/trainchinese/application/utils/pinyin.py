"""Pinyin normalization: tone marks to tone numbers."""

import re
from collections.abc import Mapping
from functools import lru_cache
from types import MappingProxyType

# Finals with tone marks -> numbered finals. ü is written as v.
TONE_MAP: Mapping[str, str] = MappingProxyType(
    {
        # a, ai, an, ang, ao
        "ā": "a1", "á": "a2", "ǎ": "a3", "à": "a4",
        "āi": "ai1", "ái": "ai2", "ǎi": "ai3", "ài": "ai4",
        "ān": "an1", "án": "an2", "ǎn": "an3", "àn": "an4",
        "āng": "ang1", "áng": "ang2", "ǎng": "ang3", "àng": "ang4",
        "āo": "ao1", "áo": "ao2", "ǎo": "ao3", "ào": "ao4",
        # e, ei, en, eng, er
        "ē": "e1", "é": "e2", "ě": "e3", "è": "e4",
        "ēi": "ei1", "éi": "ei2", "ěi": "ei3", "èi": "ei4",
        "ēn": "en1", "én": "en2", "ěn": "en3", "èn": "en4",
        "ēng": "eng1", "éng": "eng2", "ěng": "eng3", "èng": "eng4",
        "ēr": "er1", "ér": "er2", "ěr": "er3", "èr": "er4",
        # i, ia, ian, iang, iao, iu, io, ie, in, ing, iong
        "ī": "i1", "í": "i2", "ǐ": "i3", "ì": "i4",
        "iā": "ia1", "iá": "ia2", "iǎ": "ia3", "ià": "ia4",
        "iān": "ian1", "ián": "ian2", "iǎn": "ian3", "iàn": "ian4",
        "iāng": "iang1", "iáng": "iang2", "iǎng": "iang3", "iàng": "iang4",
        "iāo": "iao1", "iáo": "iao2", "iǎo": "iao3", "iào": "iao4",
        "iū": "iu1", "iú": "iu2", "iǔ": "iu3", "iù": "iu4",
        "iō": "io1", "ió": "io2", "iǒ": "io3", "iò": "io4",
        "īe": "ie1", "íe": "ie2", "ǐe": "ie3", "ìe": "ie4",
        "īn": "in1", "ín": "in2", "ǐn": "in3", "ìn": "in4",
        "īng": "ing1", "íng": "ing2", "ǐng": "ing3", "ìng": "ing4",
        "iōng": "iong1", "ióng": "iong2", "ǐong": "iong3", "iòng": "iong4",
        # o, ong, ou
        "ō": "o1", "ó": "o2", "ǒ": "o3", "ò": "o4",
        "ōng": "ong1", "óng": "ong2", "ǒng": "ong3", "òng": "ong4",
        "ōu": "ou1", "óu": "ou2", "ǒu": "ou3", "òu": "ou4",
        # u, ua, uai, uan, uang, ue, ui, un, uo
        "ū": "u1", "ú": "u2", "ǔ": "u3", "ù": "u4",
        "ūa": "ua1", "úa": "ua2", "ǔa": "ua3", "ùa": "ua4",
        "ūai": "uai1", "úai": "uai2", "ǔai": "uai3", "ùai": "uai4",
        "ūan": "uan1", "úan": "uan2", "ǔan": "uan3", "ùan": "uan4",
        "ūang": "uang1", "úang": "uang2", "ǔang": "uang3", "ùang": "uang4",
        "ūe": "ue1", "úe": "ue2", "ǔe": "ue3", "ùe": "ue4",
        "ūi": "ui1", "úi": "ui2", "ǔi": "ui3", "ùi": "ui4",
        "ūn": "un1", "ún": "un2", "ǔn": "un3", "ùn": "un4",
        "ūo": "uo1", "úo": "uo2", "ǔo": "uo3", "ùo": "uo4",
        # ü, üe, üan, ün (four tones + neutral)
        "ǖ": "v1", "ǘ": "v2", "ǚ": "v3", "ǜ": "v4", "ü": "v",
        "ǖe": "ve1", "ǘe": "ve2", "ǚe": "ve3", "ǜe": "ve4", "üe": "ve",
        "ǖan": "van1", "ǘan": "van2", "ǚan": "van3", "ǜan": "van4", "üan": "van",
        "ǖn": "vn1", "ǘn": "vn2", "ǚn": "vn3", "ǜn": "vn4", "ün": "vn",
        # Full-width punctuation
        "｜": "|", "（": "(", "）": ")", "·": ".", "’": "'",
    }
)


@lru_cache(maxsize=8)
def _finals_pattern(finals: frozenset[str]) -> re.Pattern[str]:
    # Longest finals first so "iāng" wins over "ā"
    ordered = sorted(finals, key=len, reverse=True)
    return re.compile("|".join(re.escape(f) for f in ordered))


def convert_pinyin(text: str, tone_map: Mapping[str, str] = TONE_MAP) -> str:
    """
    Convert tone-marked pinyin to tone numbers.

    Example: ``"nǐ hǎo"`` -> ``"ni3 hao3"``. Characters without a mapping are
    kept as they are.
    """
    if not tone_map:
        return text
    pattern = _finals_pattern(frozenset(tone_map))
    return pattern.sub(lambda m: tone_map[m.group(0)], text)


def compare_pinyin(given: str, expected: str) -> bool:
    """Compare two pinyin strings ignoring spaces."""
    return given.replace(" ", "") == expected.replace(" ", "")

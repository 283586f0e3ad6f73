#!/usr/bin/env python3

# Copyright (C) 2017-2022 The btchd developers
#
# This file is part of btchd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of btchd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `btchd.mnemonic.wordlists` module."

import unicodedata
from concurrent.futures import ThreadPoolExecutor

import pytest

from btchd.exceptions import InvalidParameter
from btchd.mnemonic.wordlists import PROVIDED_LANGUAGES, WORDLISTS, WordLists


def test_indexes() -> None:
    lang = "en"
    mnem = "ozone drill grab fiber curtain grace pudding thank cruise elder eight picnic"
    indx = [1268, 535, 810, 685, 433, 811, 1385, 1790, 421, 570, 567, 1313]
    assert [WORDLISTS.index(word, lang) for word in mnem.split()] == indx
    wordlist = WORDLISTS.wordlist(lang)
    assert " ".join(wordlist[i] for i in indx) == mnem

    with pytest.raises(KeyError):
        WORDLISTS.index("ozon", lang)


def test_wordlist_1() -> None:
    for lang in PROVIDED_LANGUAGES:
        wordlist = WORDLISTS.wordlist(lang)
        assert isinstance(wordlist, list)
        assert len(wordlist) == 2048
        assert WORDLISTS.language_length(lang) == 2048
        # NFKD normalized
        for word in wordlist:
            assert unicodedata.normalize("NFKD", word) == word

    assert WORDLISTS.wordlist("en")[0] == "abandon"
    assert WORDLISTS.wordlist("en")[-1] == "zoo"
    assert WORDLISTS.wordlist("it")[0] == "abaco"


def test_wordlist_2(tmp_path) -> None:
    wordlists = WordLists()

    lang = "fakeen"
    err_msg = "missing file for language 'fakeen'"
    with pytest.raises(InvalidParameter, match=err_msg):
        wordlists.load_lang(lang)

    # dictionary length must be a power of two
    filename = tmp_path / "fakeenglish.txt"
    filename.write_text("abandon\nability\nable\n", encoding="utf-8")
    err_msg = "invalid wordlist length: 3, not a power of two"
    with pytest.raises(InvalidParameter, match=err_msg):
        wordlists.load_lang(lang, str(filename))

    # dynamically add a new language
    lang = "en2"
    filename = tmp_path / "english.txt"
    filename.write_text("\n".join(WORDLISTS.wordlist("en")) + "\n", encoding="utf-8")
    wordlists.load_lang(lang, str(filename))
    assert lang in wordlists.languages
    assert wordlists.language_length(lang) == 2048
    assert wordlists.wordlist(lang) == WORDLISTS.wordlist("en")
    assert wordlists.index("zoo", lang) == 2047


def test_concurrent_loading() -> None:
    wordlists = WordLists()
    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(wordlists.wordlist, ["en"] * 16 + ["fr"] * 16))
    assert all(result is results[0] for result in results[:16])
    assert all(result is results[16] for result in results[16:])
    assert len(wordlists.wordlist("fr")) == 2048

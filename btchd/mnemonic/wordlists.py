#!/usr/bin/env python3

# Copyright (C) 2017-2022 The btchd developers
#
# This file is part of btchd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of btchd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Language word-lists for mnemonic sentences."

import threading
import unicodedata
from typing import Dict, List, Optional

from mnemonic import Mnemonic as _MnemonicProvider

from btchd.exceptions import InvalidParameter

WordList = List[str]

# short language code: word-list name in the mnemonic package
PROVIDED_LANGUAGES = {
    "en": "english",
    "es": "spanish",
    "fr": "french",
    "it": "italian",
    "ja": "japanese",
    "ko": "korean",
    "pt": "portuguese",
    "cs": "czech",
    "zh": "chinese_simplified",
}


def normalize_string(txt: str) -> str:
    "Return the NFKD normalized form of the text."
    return unicodedata.normalize("NFKD", txt)


class WordLists:
    """Class for word-lists to be used in entropy/mnemonic conversions.

    BIP39 word-lists are from the mnemonic package,
    see https://github.com/bitcoin/bips/blob/master/bip-0039/bip-0039-wordlists.md

    More word-lists can be added using the load_lang method.

    Word-lists are loaded only if needed and read only once;
    loading is guarded by a lock, so that a WordLists instance
    can be shared across threads.
    """

    def __init__(self) -> None:

        self.language_files: Dict[str, str] = {}
        self.languages = list(PROVIDED_LANGUAGES)
        self._wordlist: Dict[str, WordList] = {}
        self._word_indexes: Dict[str, Dict[str, int]] = {}
        self._lock = threading.Lock()

    def load_lang(self, lang: str, filename: Optional[str] = None) -> None:
        """Load/add a language word-list if not loaded/added yet.

        The language file has to be provided for adding new languages
        beyond those already provided.
        """

        with self._lock:
            # a new language, unknown before
            if lang not in self.languages:
                if filename is None:
                    raise InvalidParameter(f"missing file for language '{lang}'")
                self.languages.append(lang)
                self.language_files[lang] = filename

            # language has not been loaded yet
            if lang not in self._wordlist:
                if lang in self.language_files:
                    with open(self.language_files[lang], "r", encoding="utf-8") as file_:
                        lines = file_.read().splitlines()
                else:
                    lines = _MnemonicProvider(PROVIDED_LANGUAGES[lang]).wordlist
                words = [normalize_string(line.strip()) for line in lines]
                words = [word for word in words if word]

                nwords = len(words)
                # http://www.graphics.stanford.edu/~seander/bithacks.html
                if nwords == 0 or nwords & (nwords - 1) != 0:
                    err_msg = f"invalid wordlist length: {nwords}, not a power of two"
                    raise InvalidParameter(err_msg)

                self._word_indexes[lang] = {w: i for i, w in enumerate(words)}
                self._wordlist[lang] = words

    def wordlist(self, lang: str) -> WordList:
        """Return the language word-list."""

        self.load_lang(lang)
        return self._wordlist[lang]

    def language_length(self, lang: str) -> int:
        """Return the number of words in the language word-list."""

        return len(self.wordlist(lang))

    def index(self, word: str, lang: str) -> int:
        """Return the index of a (normalized) word in the language word-list.

        KeyError is raised if the word is not in the word-list.
        """

        self.load_lang(lang)
        return self._word_indexes[lang][word]


# singleton
WORDLISTS = WordLists()

"""Word counting, keyword and naive Bayes topic detection, and TF-IDF summaries."""

from __future__ import annotations

import math
import re
import string
from dataclasses import dataclass, field, replace
from typing import Iterable

UNKNOWN_TOPIC = "Necunoscut"
SENTENCE_SPLIT_ERROR = "Eroare la împărțirea textului în propoziții."

_WORD_RE = re.compile(r"\b[a-zA-Z]+\b", re.ASCII)
_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]")
_MAX_TOKEN_LENGTH = 255

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_ASCII_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)

_STOPWORDS = frozenset({
    "a", "about", "above", "after", "again", "against", "all", "am", "an", "and", "any", "are",
    "as", "at", "be", "because", "been", "before", "being", "below", "between", "both", "but",
    "by", "could", "did", "do", "does", "doing", "down", "during", "each", "few", "for", "from",
    "further", "had", "has", "have", "having", "he", "he'd", "he'll", "he's", "her", "here",
    "here's", "hers", "herself", "him", "himself", "his", "how", "how's", "i", "i'd", "i'll",
    "i'm", "i've", "if", "in", "into", "is", "it", "it's", "its", "itself", "let's", "me",
    "more", "most", "my", "myself", "nor", "of", "on", "once", "only", "or", "other", "ought",
    "our", "ours", "ourselves", "out", "over", "own", "same", "she", "she'd", "she'll", "she's",
    "should", "so", "some", "such", "than", "that", "that's", "the", "their", "theirs", "them",
    "themselves", "then", "there", "there's", "these", "they", "they'd", "they'll", "they're",
    "they've", "this", "those", "through", "to", "too", "under", "until", "up", "very", "was",
    "we", "we'd", "we'll", "we're", "we've", "were", "what", "what's", "when", "when's", "where",
    "where's", "which", "while", "who", "who's", "whom", "why", "why's", "with", "would", "you",
    "you'd", "you'll", "you're", "you've", "your", "yours", "yourself", "yourselves",
    "si", "al", "ale", "pe", "la", "care", "ce", "cu", "din", "despre", "pentru",
    "este", "sunt", "ca", "mai", "sau", "de", "nu", "sa", "o", "dar", "unui", "unei",
    "acest", "aceasta", "acesta", "aceștia", "acestea", "prin", "iar", "fi", "fost", "ei",
    "ea", "el", "lor", "lui", "său",
})

_DOMAIN_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Sport", (
        "fotbal", "meci", "jucător", "echipă", "campionat", "sportiv", "baschet", "tenis",
        "competiție", "olimpic", "scor", "turneu", "victorie", "înfrângere", "gol",
    )),
    ("Politică", (
        "președinte", "guvern", "parlament", "lege", "politică", "alegeri", "ministru",
        "democrat", "partid", "vot", "stat", "constituție", "referendum", "senat",
    )),
    ("Tehnologie", (
        "tehnologie", "computer", "software", "internet", "aplicație", "digital", "rețea",
        "programare", "inovație", "device", "sistem", "algoritm", "inteligență", "date",
        "inteligență artificială", "IA", "AI", "învățare automată", "rețele neurale",
        "machine learning", "deep learning", "automatizare", "roboți", "neural", "procesare",
    )),
)

_BAYES_DOMAINS = ("Sport", "Politică", "Tehnologie")


def _ascii_lower(text: str) -> str:
    return text.translate(_ASCII_LOWER)


def _ascii_upper(text: str) -> str:
    return text.translate(_ASCII_UPPER)


def _contains_ci(haystack: str, needle: str) -> bool:
    """Case-insensitive substring test with a single forward scan.

    A partial match that fails is abandoned without re-examining the failing
    character, and a one-character needle never matches.
    """
    upper_needle = _ascii_upper(needle)
    matching = False
    position = 0
    for char in _ascii_upper(haystack):
        if matching:
            if position < len(upper_needle) and char == upper_needle[position]:
                position += 1
                if position == len(upper_needle):
                    return True
            else:
                matching = False
        elif upper_needle and char == upper_needle[0]:
            matching = True
            position = 1
    return False


@dataclass
class Token:
    """A distinct word of a text with its raw count and TF-IDF weights."""

    token: str
    count: int = 1
    tf: float = 0.0
    idf: float = 0.0
    tf_idf: float = 0.0


@dataclass
class _DomainStats:
    name: str
    probability: float
    document_count: int = 0
    word_counts: dict[str, int] = field(default_factory=dict)


def is_stopword(word: str) -> bool:
    """Return True if the word is an English or Romanian stopword (ASCII case-insensitive)."""
    return _ascii_lower(word) in _STOPWORDS


def count_words(text: str) -> int:
    """Count runs of ASCII letters that stand as whole words."""
    return sum(1 for _ in _WORD_RE.finditer(text))


def tokenize_text(text: str) -> list[Token]:
    """Return the distinct lower-cased non-stopword words in order of first appearance."""
    counts: dict[str, int] = {}
    for match in _WORD_RE.finditer(text):
        word = match.group().lower()
        if len(word) > _MAX_TOKEN_LENGTH or is_stopword(word):
            continue
        counts[word] = counts.get(word, 0) + 1
    return [Token(word, count) for word, count in counts.items()]


def determine_topic(text: str) -> str:
    """Pick the domain whose keywords occur most often, or the unknown topic."""
    tokens = tokenize_text(text)
    best_name = UNKNOWN_TOPIC
    best_score = 0
    for name, keywords in _DOMAIN_KEYWORDS:
        lowered = [_ascii_lower(keyword) for keyword in keywords]
        score = sum(
            token.count
            for token in tokens
            for keyword in lowered
            if token.token == keyword
        )
        if score > best_score:
            best_score = score
            best_name = name
    return best_name


def split_sentences(text: str) -> list[str]:
    """Split text into sentences, each ending in '.', '!' or '?'; trailing text is dropped."""
    return [match.group() for match in _SENTENCE_RE.finditer(text)]


def calculate_tf_idf(tokens: Iterable[Token], documents: Iterable[str]) -> list[Token]:
    """Return copies of the tokens with term frequency and inverse document frequency set."""
    tokens = list(tokens)
    documents = list(documents)
    total = sum(token.count for token in tokens)
    weighted = []
    for token in tokens:
        tf = token.count / total
        containing = sum(1 for document in documents if _contains_ci(document, token.token))
        idf = math.log((len(documents) + 1) / (containing + 1))
        weighted.append(replace(token, tf=tf, idf=idf, tf_idf=tf * idf))
    return weighted


def _rank_by_score(scored: list[tuple[str, float]]) -> list[tuple[str, float]]:
    # Exchange sort: the order among equal scores decides which sentences are kept.
    ranked = list(scored)
    for i in range(len(ranked) - 1):
        for j in range(i + 1, len(ranked)):
            if ranked[j][1] > ranked[i][1]:
                ranked[i], ranked[j] = ranked[j], ranked[i]
    return ranked


def generate_summary(text: str, max_sentences: int = 3, documents: Iterable[str] = ()) -> str:
    """Build an extractive summary of the best-scoring sentences in original order.

    Raises ValueError when the text holds no complete sentence.
    """
    tokens = calculate_tf_idf(tokenize_text(text), documents)
    sentences = split_sentences(text)
    if not sentences:
        raise ValueError(SENTENCE_SPLIT_ERROR)

    last = len(sentences) - 1
    scored = []
    for index, sentence in enumerate(sentences):
        score = sum(token.tf_idf for token in tokens if _contains_ci(sentence, token.token))
        length = count_words(sentence)
        if length > 0:
            score /= length
        if index in (0, last):
            score *= 1.5
        scored.append((sentence, score))

    summary_length = min(max_sentences, len(sentences))
    if summary_length <= 0:
        summary_length = 1

    selected = [sentence for sentence, _ in _rank_by_score(scored)[:summary_length]]
    selected.sort(key=text.find)
    return "".join(f"{sentence} " for sentence in selected)


class BayesClassifier:
    """Multinomial naive Bayes classifier over the Sport, Politică and Tehnologie domains."""

    def __init__(self) -> None:
        self.domains = [
            _DomainStats(name, 1.0 / len(_BAYES_DOMAINS)) for name in _BAYES_DOMAINS
        ]
        self.total_documents = 0

    def train(self, text: str, domain: str) -> None:
        """Add one document to a known domain; unknown domains are ignored."""
        stats = next((d for d in self.domains if d.name == domain), None)
        if stats is None:
            return
        stats.document_count += 1
        self.total_documents += 1
        for other in self.domains:
            other.probability = other.document_count / self.total_documents
        for token in tokenize_text(text):
            stats.word_counts[token.token] = stats.word_counts.get(token.token, 0) + token.count

    def classify(self, text: str) -> str:
        """Return the most likely domain, or the unknown topic if none scores above -1."""
        tokens = tokenize_text(text)
        best_name = UNKNOWN_TOPIC
        best_score = -1.0
        for stats in self.domains:
            denominator = sum(stats.word_counts.values()) + len(stats.word_counts) + 1.0
            score = math.log(stats.probability) if stats.probability > 0 else -math.inf
            for token in tokens:
                occurrences = stats.word_counts.get(token.token, 0)
                score += math.log((occurrences + 1.0) / denominator) * token.count
            if score > best_score:
                best_score = score
                best_name = stats.name
        return best_name
import json
import re

import pytest

from fontprint.config import Settings
from fontprint.core.font_classifier import classify
from fontprint.core.hasher import canonical_payload, fingerprint_hash
from fontprint.core.models import FontCandidate, SourceCategory
from fontprint.exceptions import HashingUnavailableError

VECTOR = [14.0, 6.0, 30.0, 30.0, 25.0, 25.0]


def test_hash_is_deterministic():
    first = fingerprint_hash(SourceCategory.RECOGNIZED, VECTOR, classify(0.8))
    second = fingerprint_hash(SourceCategory.RECOGNIZED, list(VECTOR), classify(0.8))

    assert first == second
    assert re.fullmatch(r"[0-9a-f]{64}", first)


def test_hash_changes_with_any_vector_component():
    base = fingerprint_hash(SourceCategory.RECOGNIZED, VECTOR, classify(0.8))
    for i in range(len(VECTOR)):
        changed = list(VECTOR)
        changed[i] = round(changed[i] + 0.1, 1)

        assert fingerprint_hash(SourceCategory.RECOGNIZED, changed, classify(0.8)) != base


def test_hash_depends_on_source_and_candidates():
    base = fingerprint_hash(SourceCategory.RECOGNIZED, VECTOR, classify(0.8))

    assert fingerprint_hash(SourceCategory.STRUCTURED, VECTOR, classify(0.8)) != base
    assert fingerprint_hash(SourceCategory.RECOGNIZED, VECTOR, classify(1.2)) != base


def test_only_leading_candidates_are_hashed():
    candidates = classify(0.8)
    extended = candidates + [FontCandidate("Extra", 0.01)]

    assert fingerprint_hash(SourceCategory.RECOGNIZED, VECTOR, candidates) == fingerprint_hash(
        SourceCategory.RECOGNIZED, VECTOR, extended
    )


def test_canonical_payload_is_sorted_and_compact():
    payload = canonical_payload(SourceCategory.VIRTUAL, [17, 1.6, 72], [FontCandidate("(virtual-render)", 1)])

    assert payload == (
        '{"font":[{"name":"(virtual-render)","score":1}],'
        '"source":"Virtual","vec":[17.0,1.6,72.0]}'
    )
    assert json.loads(payload)["source"] == "Virtual"


def test_unavailable_algorithm_is_fatal():
    with pytest.raises(HashingUnavailableError):
        fingerprint_hash(SourceCategory.RECOGNIZED, VECTOR, [], Settings(hash_algorithm="no-such-digest"))


@pytest.mark.parametrize("algorithm", ["shake_128", "shake_256"])
def test_variable_length_digest_is_fatal(algorithm):
    with pytest.raises(HashingUnavailableError):
        fingerprint_hash(SourceCategory.RECOGNIZED, VECTOR, [], Settings(hash_algorithm=algorithm))


def test_other_fixed_length_algorithms_are_accepted():
    digest = fingerprint_hash(SourceCategory.RECOGNIZED, VECTOR, [], Settings(hash_algorithm="sha1"))

    assert re.fullmatch(r"[0-9a-f]{40}", digest)

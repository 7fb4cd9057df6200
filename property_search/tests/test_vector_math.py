import numpy as np
import pytest

from property_search.search.errors import EmptyInputError, LengthMismatchError
from property_search.search.vector_math import centroid, cosine_similarities, cosine_similarity


def test_cosine_similarity_is_symmetric():
    a = [0.3, -1.2, 4.0, 0.5]
    b = [2.0, 0.1, -0.7, 1.5]
    assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))


def test_cosine_similarity_of_vector_with_itself_is_one():
    a = np.array([0.2, 0.4, -0.1])
    assert cosine_similarity(a, a) == pytest.approx(1.0)


def test_cosine_similarity_of_opposite_vectors():
    assert cosine_similarity([1, 2, 3], [-1, -2, -3]) == pytest.approx(-1.0)


def test_cosine_similarity_known_value():
    assert cosine_similarity([1, 0, 0], [0.9, 0.1, 0]) == pytest.approx(0.9939, abs=1e-4)


def test_cosine_similarity_zero_vector_returns_exactly_zero():
    assert cosine_similarity([0, 0, 0], [1, 2, 3]) == 0.0
    assert cosine_similarity([1, 2, 3], [0, 0, 0]) == 0.0


def test_cosine_similarity_rejects_length_mismatch():
    with pytest.raises(LengthMismatchError):
        cosine_similarity([1, 0], [1, 0, 0])


def test_length_mismatch_is_a_value_error():
    with pytest.raises(ValueError):
        cosine_similarity([1.0], [1.0, 2.0])


def test_batch_similarities_match_pairwise():
    query = [0.5, 0.5, 0.0]
    matrix = np.array([[1.0, 0.0, 0.0], [0.0, 0.0, 0.0], [0.2, 0.7, 0.1]])
    scores = cosine_similarities(query, matrix)
    expected = [cosine_similarity(query, row) for row in matrix]
    assert scores == pytest.approx(expected)
    assert scores[1] == 0.0


def test_batch_similarities_reject_wrong_width():
    with pytest.raises(LengthMismatchError):
        cosine_similarities([1.0, 0.0], np.ones((3, 4)))


def test_centroid_of_single_embedding_is_normalized_form():
    vec = np.array([3.0, 4.0, 0.0])
    assert centroid([vec]) == pytest.approx(vec / 5.0)


def test_centroid_is_unit_length_mean():
    result = centroid([[1.0, 0.0], [0.0, 1.0]])
    assert result == pytest.approx([np.sqrt(0.5), np.sqrt(0.5)])
    assert np.linalg.norm(result) == pytest.approx(1.0)


def test_centroid_zero_mean_returns_zero_vector():
    result = centroid([[1.0, -2.0], [-1.0, 2.0]])
    assert result.tolist() == [0.0, 0.0]


def test_centroid_rejects_empty_input():
    with pytest.raises(EmptyInputError):
        centroid([])


def test_centroid_rejects_mismatched_lengths():
    with pytest.raises(LengthMismatchError):
        centroid([[1.0, 0.0], [1.0, 0.0, 0.0]])

"""Pytest configuration and fixtures."""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from calm_assessment.main import app
from calm_assessment.questionnaire.loader import load_question_bank
from calm_assessment.questionnaire.models import QuestionBank
from tests.helpers import make_bank, option

REFERENCE_BANK = "calm-v1.0.0.yaml"


@pytest.fixture(scope="session")
def reference_bank() -> QuestionBank:
    """The packaged 20-question CALM bank."""
    return load_question_bank(REFERENCE_BANK)


@pytest.fixture
def all_a_answers(reference_bank: QuestionBank) -> dict[str, str]:
    """Every reference question answered with option A."""
    return {qid: "A" for qid in reference_bank.question_ids}


@pytest.fixture
def mini_bank() -> QuestionBank:
    """Three-question bank: two anticipatory items and one recovery item.

    Option X maximises the question's main dimension, Z scores nothing.
    Maximum recovery capacity is 3.
    """
    return make_bank([
        {"id": "a1", "options": [option("X", AC=3), option("Y", AC=1), option("Z")]},
        {"id": "a2", "options": [option("X", AC=3), option("Y", CO=2), option("Z")]},
        {"id": "r1", "options": [option("X", RC=3), option("Z")]},
    ])


@pytest.fixture
def stability_bank() -> QuestionBank:
    """Five recovery questions with distinct option ids (max RC 15)."""
    return make_bank([
        {
            "id": f"s{i}",
            "options": [
                option("A", RC=3),
                option("B", RC=3),
                option("C", RC=3),
                option("D", RC=3),
                option("E"),
            ],
        }
        for i in range(1, 6)
    ])


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Create test client for the API."""
    with TestClient(app) as test_client:
        yield test_client

import pytest

from personatwin.interview import QuestionBank, QuestionCategory, ALL_QUESTIONS


def test_catalog_has_ten_ordered_questions(bank):
    questions = bank.all_questions()
    assert [q.id for q in questions] == list(range(1, 11))
    assert questions[0].category == QuestionCategory.ICEBREAKER
    assert questions[-1].category == QuestionCategory.EMOTIONAL


def test_active_questions_default_to_first_three():
    active = QuestionBank().active_questions()
    assert [q.id for q in active] == [1, 2, 3]


def test_active_question_count_is_clamped():
    assert len(QuestionBank(active_question_count=0).active_questions()) == 1
    assert len(QuestionBank(active_question_count=-5).active_questions()) == 1
    assert len(QuestionBank(active_question_count=100).active_questions()) == len(ALL_QUESTIONS)


def test_follow_up_matches_case_insensitively(bank):
    question = bank.get_question(1)
    follow_up = QuestionBank.follow_up("My FRIEND did a bit at dinner", question)
    assert follow_up == "Your friends sound fun! Are you usually the one making jokes or laughing at them?"


def test_follow_up_uses_first_trigger_in_table_order(bank):
    question = bank.get_question(1)
    # Both "friend" and "show" match; "show" comes first in the table
    follow_up = QuestionBank.follow_up("Watched a show with a friend", question)
    assert follow_up == "Oh nice! What kind of humor does it have?"


def test_follow_up_none_without_trigger(bank):
    assert QuestionBank.follow_up("cats mostly", bank.get_question(1)) is None


def test_lookup_helpers(bank):
    assert bank.get_question(99) is None
    assert [q.id for q in bank.questions_by_category(QuestionCategory.HUMOR)] == [5, 6]
    # Lookups only see the active prefix
    assert QuestionBank(active_question_count=3).get_question(5) is None


def test_empty_catalog_is_rejected():
    with pytest.raises(ValueError):
        QuestionBank(questions=[])

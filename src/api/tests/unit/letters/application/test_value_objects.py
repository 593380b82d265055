"""Unit tests for LetterDetails projections."""

from iam.domain.value_objects import UserRole
from letters.application.value_objects import LetterDetails


class TestLetterDetailsForViewer:
    def test_mentor_may_reply_to_unanswered_letter(self, make_letter_status):
        status = make_letter_status()

        details = LetterDetails.for_viewer(status, UserRole.MENTOR, "sparrow")

        assert details.can_reply is True
        assert details.can_thank is False
        assert details.mentor_letter is None

    def test_mentee_may_thank_answered_letter_once(self, make_letter_status):
        status = make_letter_status(replied=True)

        assert LetterDetails.for_viewer(status, UserRole.MENTEE, "owl").can_thank

        status.thank()
        details = LetterDetails.for_viewer(status, UserRole.MENTEE, "owl")
        assert details.can_thank is False
        assert details.is_thanked is True

    def test_saved_flag_follows_viewer_side(self, make_letter_status):
        status = make_letter_status()
        status.mark_saved(UserRole.MENTEE)

        assert LetterDetails.for_viewer(status, UserRole.MENTEE, None).is_saved
        assert not LetterDetails.for_viewer(status, UserRole.MENTOR, None).is_saved

import pytest

from scorebook.domain.codes import OUT_CODES, REACH_FIRST_CODES, VERBATIM_OUT_CODES, WhyCode


class TestWhyCodeParse:
    @pytest.mark.parametrize(("raw", "expected"), [("BB", WhyCode.BB), ("kk", WhyCode.KK), (" hr ", WhyCode.HR)])
    def test_known_codes(self, raw: str, expected: WhyCode) -> None:
        assert WhyCode.parse(raw) is expected

    def test_legacy_fielders_choice(self) -> None:
        assert WhyCode.parse("C") is WhyCode.FC

    @pytest.mark.parametrize("raw", [None, "", "   ", "XYZ", 7])
    def test_blank_or_unknown_is_undecided(self, raw: object) -> None:
        assert WhyCode.parse(raw) is None


class TestCodeGroups:
    def test_sacrifice_bunt_is_an_out_but_not_shown_verbatim(self) -> None:
        assert WhyCode.SH in OUT_CODES
        assert WhyCode.SH not in VERBATIM_OUT_CODES

    def test_reach_first_and_out_codes_disjoint(self) -> None:
        assert not REACH_FIRST_CODES & OUT_CODES

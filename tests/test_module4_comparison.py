# file: tests/test_module4_comparison.py

"""
Unit tests for Module 4: Comparison Harness.

Test coverage:
    - Per-trial classification rules
    - Boundary channels (noiseless, every bit flipped)
    - Determinism and parameter validation
    - Hamming payload normalization
    - Derived metrics and flat records
"""

import numpy as np
import pytest

import src.module4_comparison.harness as harness
from src.module1_bitstring import (
    make_rng,
    InvalidParameterError,
    InvalidPolynomialError,
)
from src.module2_codecs import hamming_encode
from src.module3_channel import ChannelOutcome, inject_errors
from src.module4_comparison import (
    TECHNIQUES,
    AggregateResult,
    classify_detection,
    classify_hamming,
    run_trial,
    run_comparison,
    outcome_rates,
    bit_error_rate,
    code_rate,
    redundancy_overhead,
    technique_code_bits,
    report_to_records,
)


class ScriptedRng:
    """Stand-in random source that hands out preset uniform draws in order."""

    def __init__(self, *draws):
        self.draws = list(draws)

    def random(self, size):
        values = np.array(self.draws.pop(0), dtype=float)
        assert len(values) == size
        return values


def _draws(length, flip=()):
    """Draws that fire (at p=0.5) exactly at the positions in ``flip``."""
    return [0.0 if i in flip else 1.0 for i in range(length)]


class TestClassification:
    """Test trial classification rules."""

    def test_detection_detected(self):
        assert classify_detection(verified=False, payload_changed=True) == 'detected'

    def test_detection_undetected(self):
        assert classify_detection(verified=True, payload_changed=True) == 'undetected'

    def test_detection_clean(self):
        assert classify_detection(verified=True, payload_changed=False) == 'clean'

    def test_detection_check_bit_only_is_clean(self):
        """Test a failed check with intact payload is not counted."""
        assert classify_detection(verified=False, payload_changed=False) == 'clean'

    def test_hamming_corrected(self):
        outcome = inject_errors(hamming_encode('1011'), [2])
        assert classify_hamming('1011', outcome) == 'corrected'

    def test_hamming_check_bit_error_corrected(self):
        """Test a flipped parity bit is repaired and counted as corrected."""
        outcome = inject_errors(hamming_encode('1011'), [3])
        assert classify_hamming('1011', outcome) == 'corrected'

    def test_hamming_miscorrection_counts_as_detected(self):
        outcome = inject_errors(hamming_encode('1011'), [0, 1])
        assert classify_hamming('1011', outcome) == 'detected'

    def test_hamming_undetected(self):
        """Test an error pattern equal to a codeword passes silently."""
        # 1110000 is the codeword for 1000, so the syndrome stays zero
        outcome = inject_errors(hamming_encode('1011'), [0, 1, 2])
        assert classify_hamming('1011', outcome) == 'undetected'

    def test_hamming_clean(self):
        outcome = ChannelOutcome(received=hamming_encode('1011'), flipped_positions=frozenset())
        assert classify_hamming('1011', outcome) == 'clean'

    def test_run_trial_labels(self):
        labels = run_trial('1011', 0.0, '1011', make_rng(0))
        assert labels == {'parity': 'clean', 'hamming': 'clean', 'crc': 'clean'}

    def test_run_trial_hamming_truth_is_truncated_payload(self):
        """Test a long payload is judged against its first 4 bits."""
        payload = '101101'
        rng = ScriptedRng(
            _draws(7),             # parity: 6 data + 1 check
            _draws(7, flip={2}),   # hamming: d1 flipped
            _draws(9),             # crc: 6 data + 3 check
        )

        labels = run_trial(payload, 0.5, '1011', rng)

        assert labels == {'parity': 'clean', 'hamming': 'corrected', 'crc': 'clean'}

    def test_run_trial_hamming_truth_is_padded_payload(self):
        """Test a short payload is judged against its zero-padded form."""
        payload = '10'
        rng = ScriptedRng(
            _draws(3),
            _draws(7, flip={4}),   # hamming: d2, one of the padding bits
            _draws(5),
        )

        labels = run_trial(payload, 0.5, '1011', rng)

        assert labels == {'parity': 'clean', 'hamming': 'corrected', 'crc': 'clean'}

    @pytest.mark.parametrize('payload, expected', [
        ('101101', '1011'),
        ('011', '0110'),
        ('1', '1000'),
    ])
    def test_run_trial_hamming_encodes_normalized_payload(self, monkeypatch, payload, expected):
        encoded = []

        def recording_encode(data):
            encoded.append(data)
            return hamming_encode(data)

        monkeypatch.setattr(harness, 'hamming_encode', recording_encode)
        run_trial(payload, 0.0, '1011', make_rng(0))

        assert encoded == [expected]

    def test_classify_hamming_against_truncated_payload(self):
        payload = '01101110'
        outcome = inject_errors(hamming_encode(payload[:4]), [6])
        assert classify_hamming(payload[:4], outcome) == 'corrected'


class TestRunComparison:
    """Test the comparison harness end to end."""

    def test_noiseless_channel_all_clean(self):
        report = run_comparison(4, 0.0, 50, seed=1)

        for name in TECHNIQUES:
            result = report[name]
            assert result.clean == 50
            assert result.detected == result.corrected == result.undetected == 0

    def test_every_bit_flipped(self):
        """Test p=1 outcomes, which follow from the code structure."""
        report = run_comparison(4, 1.0, 20, seed=1)

        # 5 flips on an even-parity word always leave odd parity
        assert report['parity'].detected == 20
        # 1111111 is a Hamming codeword, so the complement of a codeword is one too
        assert report['hamming'].undetected == 20
        # 1111111 = (x^3 + x + 1)(x^3 + x^2 + 1), a multiple of the generator
        assert report['crc'].undetected == 20

    def test_totals_match_iterations(self):
        report = run_comparison(8, 0.2, 200, seed=5)
        for name in TECHNIQUES:
            assert report[name].total == 200

    def test_deterministic_with_seed(self):
        first = run_comparison(6, 0.15, 100, seed=42)
        second = run_comparison(6, 0.15, 100, seed=42)
        assert first == second

    def test_injected_rng_matches_seed(self):
        by_seed = run_comparison(4, 0.1, 100, seed=7)
        by_rng = run_comparison(4, 0.1, 100, rng=make_rng(7))
        assert by_seed.results == by_rng.results

    def test_report_records_parameters(self):
        report = run_comparison(5, 0.05, 10, polynomial='10011', seed=3)
        assert report.data_length == 5
        assert report.flip_probability == 0.05
        assert report.iterations == 10
        assert report.polynomial == '10011'
        assert report.seed == 3
        assert set(report.results) == set(TECHNIQUES)

    def test_noisy_channel_exercises_buckets(self):
        """Test a moderately noisy channel produces detections and corrections."""
        report = run_comparison(4, 0.05, 2000, seed=11)
        assert report['parity'].detected > 0
        assert report['hamming'].corrected > 0
        assert report['crc'].detected > 0

    @pytest.mark.parametrize('data_length', [1, 2, 8, 16])
    def test_hamming_normalization_any_length(self, data_length):
        """Test payloads of any length still run through Hamming(7,4)."""
        report = run_comparison(data_length, 0.0, 10, seed=2)
        assert report['hamming'].clean == 10

    def test_invalid_iterations(self):
        with pytest.raises(InvalidParameterError, match="iterations must be > 0"):
            run_comparison(4, 0.1, 0)

    def test_invalid_data_length(self):
        with pytest.raises(InvalidParameterError, match="data_length must be > 0"):
            run_comparison(0, 0.1, 10)

    def test_invalid_probability(self):
        with pytest.raises(InvalidParameterError, match="flip_probability"):
            run_comparison(4, 1.5, 10)

    def test_invalid_polynomial(self):
        with pytest.raises(InvalidPolynomialError):
            run_comparison(4, 0.1, 10, polynomial='0101')

    def test_results_are_immutable(self):
        report = run_comparison(4, 0.1, 10, seed=1)
        with pytest.raises(AttributeError):
            report['parity'].detected = 99

    def test_results_mapping_is_read_only(self):
        report = run_comparison(4, 0.1, 10, seed=1)
        with pytest.raises(TypeError):
            report.results['parity'] = AggregateResult()
        with pytest.raises(AttributeError):
            report.results = {}

    def test_report_is_a_mapping(self):
        report = run_comparison(4, 0.1, 10, seed=1)

        assert 'parity' in report
        assert 'ldpc' not in report
        assert set(report) == set(TECHNIQUES)
        assert len(report) == 3
        assert dict(report.items()) == dict(report.results)
        assert report.get('ldpc') is None

    def test_injected_rng_does_not_record_seed(self):
        report = run_comparison(4, 0.1, 10, rng=make_rng(7), seed=99)
        assert report.seed is None


class TestMetrics:
    """Test derived metrics."""

    def test_outcome_rates(self):
        rates = outcome_rates(AggregateResult(detected=25, corrected=10, undetected=5, clean=60), 100)
        assert rates == {'detected': 0.25, 'corrected': 0.10, 'undetected': 0.05, 'clean': 0.60}

    def test_outcome_rates_invalid(self):
        with pytest.raises(ValueError):
            outcome_rates(AggregateResult(), 0)

    def test_bit_error_rate(self):
        assert bit_error_rate('0000', '0100') == 0.25
        assert bit_error_rate('', '') == 0.0

    def test_code_rate(self):
        assert abs(code_rate(4, 7) - 4 / 7) < 1e-9

    def test_redundancy_overhead(self):
        assert redundancy_overhead(4, 7) == 75.0
        with pytest.raises(ValueError):
            redundancy_overhead(0, 7)
        with pytest.raises(ValueError):
            redundancy_overhead(7, 4)

    def test_technique_code_bits(self):
        assert technique_code_bits('parity', 8, '1011') == {'data_bits': 8, 'code_bits': 9}
        assert technique_code_bits('hamming', 8, '1011') == {'data_bits': 4, 'code_bits': 7}
        assert technique_code_bits('crc', 8, '1011') == {'data_bits': 8, 'code_bits': 11}
        with pytest.raises(ValueError, match="Unknown technique"):
            technique_code_bits('ldpc', 8, '1011')

    def test_report_to_records(self):
        report = run_comparison(4, 0.1, 100, seed=9)
        records = report_to_records(report)

        assert [row['technique'] for row in records] == list(TECHNIQUES)
        for row in records:
            total_rate = row['detected_rate'] + row['corrected_rate'] + row['undetected_rate'] + row['clean_rate']
            assert abs(total_rate - 1.0) < 1e-9
            assert row['redundancy_overhead'] > 0

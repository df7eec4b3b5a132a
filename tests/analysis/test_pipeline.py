"""
Tests for the end-to-end analysis pipeline.
"""

import pytest
import numpy as np

from autoprice.analysis import (
    CANDIDATE_MODELS,
    FULL_MODEL,
    AnalysisConfig,
    clean,
    fit_models,
    get_model,
    load,
    run_analysis,
    transform,
)
from autoprice.core.exceptions import ColumnNotFoundError, ValidationError


@pytest.fixture
def config(auto_csv):
    return AnalysisConfig(data_path=auto_csv)


@pytest.fixture
def result(config):
    return run_analysis(config)


class TestConfig:

    def test_defaults(self, auto_csv):
        config = AnalysisConfig(data_path=str(auto_csv))
        assert config.price_threshold == 70000
        assert config.data_path == auto_csv
        assert config.recommended == 'model2'
        assert not config.writes_plots

    def test_writes_plots(self, auto_csv, tmp_path):
        assert AnalysisConfig(data_path=auto_csv, output_dir=tmp_path).writes_plots
        assert not AnalysisConfig(
            data_path=auto_csv, output_dir=tmp_path, make_plots=False
        ).writes_plots

    @pytest.mark.parametrize("kwargs", [
        {'price_threshold': 0},
        {'backend': 'gpu'},
        {'recommended': 'model9'},
        {'fitted_bins': 0},
        {'histogram_bins': 0},
    ])
    def test_invalid(self, auto_csv, kwargs):
        with pytest.raises(ValidationError):
            AnalysisConfig(data_path=auto_csv, **kwargs)


class TestModels:

    def test_candidate_predictors(self):
        assert get_model('model1').predictors == ('length', 'curb_weight')
        assert get_model('model2').predictors == (
            'hp', 'curb_weight', 'rear', 'luxury', 'hybrid',
        )
        assert get_model('model3').predictors == ('hp', 'curb_weight', 'mpg', 'seven_over')
        assert len(FULL_MODEL.predictors) == 15

    def test_unknown_model(self):
        with pytest.raises(KeyError):
            get_model('model4')


class TestStages:

    def test_load_clean_transform(self, config, planted_outlier_prices):
        raw = load(config)
        kept, outliers = clean(raw, config)
        assert outliers.n_observations == len(planted_outlier_prices)
        assert kept.n_observations + outliers.n_observations == raw.n_observations
        prepared = transform(kept)
        np.testing.assert_allclose(prepared['log_price'], np.log(kept['price']))

    def test_fit_models_order(self, config):
        prepared = transform(clean(load(config), config)[0])
        fitted = fit_models(prepared, CANDIDATE_MODELS)
        assert list(fitted) == ['model1', 'model2', 'model3']
        assert all(s.n == prepared.n_observations for s in fitted.values())


class TestRunAnalysis:

    def test_models_fit_on_clean_rows(self, result, planted_outlier_prices):
        n_clean = result.raw.n_observations - len(planted_outlier_prices)
        assert result.clean.n_observations == n_clean
        assert all(model.n == n_clean for model in result.models.values())
        assert result.full_model.p == 16

    def test_summaries(self, result):
        assert result.raw_price_summary.maximum == 150000
        assert result.raw_price_summary.n == result.raw.n_observations
        assert result.log_price_summary.maximum < np.log(70000)

    def test_correlations(self, result):
        r = result.correlations
        assert r.shape == (16, 16)
        np.testing.assert_allclose(np.diag(r), 1.0)
        np.testing.assert_allclose(r, r.T)

    def test_recommended(self, result):
        assert result.recommended is result.models['model2']
        assert result.recommended_spec.name == 'model2'

    def test_recommended_model_is_best(self, result):
        # Data follow the recommended model's form
        assert result.comparison.best_by('adjusted_r_squared').name == 'model2'
        assert result.comparison.best_by('cp').name == 'model2'
        assert result.recommended.adjusted_r_squared > 0.8

    def test_cleaning_improves_fit(self, auto_csv, result):
        unfiltered = run_analysis(AnalysisConfig(data_path=auto_csv, price_threshold=1e9))
        assert unfiltered.outliers.n_observations == 0
        assert (
            result.recommended.adjusted_r_squared
            > unfiltered.recommended.adjusted_r_squared
        )

    def test_diagnostics(self, result):
        diag = result.diagnostics
        assert [av.predictor for av in diag.added_variables] == ['luxury', 'hybrid']
        assert sum(diag.residual_bins.counts) == result.clean.n_observations
        assert len(diag.residual_bins.groups) == 5
        assert diag.qq.sample.size == result.clean.n_observations

    def test_added_variable_slope_matches_model(self, result):
        hybrid = result.diagnostics.added_variables[1]
        assert hybrid.slope == pytest.approx(result.recommended.coef('hybrid'), rel=1e-8)

    def test_svd_backend(self, auto_csv):
        out = run_analysis(AnalysisConfig(data_path=auto_csv, backend='cpu_svd'))
        assert out.recommended.backend_name == 'cpu_svd'


class TestRunAnalysisErrors:

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            run_analysis(AnalysisConfig(data_path=tmp_path / "nope.csv"))

    def test_missing_column(self, auto_frame, tmp_path):
        path = tmp_path / "cars.csv"
        auto_frame.drop(columns=['Luxuary']).to_csv(path, index=False)
        with pytest.raises(ColumnNotFoundError):
            run_analysis(AnalysisConfig(data_path=path))

    def test_threshold_removes_everything(self, auto_csv):
        with pytest.raises(ValidationError, match="removes all"):
            run_analysis(AnalysisConfig(data_path=auto_csv, price_threshold=1.0))

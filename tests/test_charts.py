import pytest

from pilite.charts import make_pi_chart


def test_chart_matches_layout(example_df):
    fig = make_pi_chart(example_df, 3.14, 0.0)
    assert fig.layout.showlegend is True
    assert list(fig.layout.xaxis.range) == pytest.approx([0, 23.0])
    line = [t for t in fig.data if t.mode == 'lines']
    assert len(line) == 1
    assert line[0].line.color == '#b22222'


def test_chart_single_specimen_without_fit(example_df):
    fig = make_pi_chart(example_df[example_df['Name'] == 'A'])
    assert fig.layout.showlegend is False
    assert all(t.mode != 'lines' for t in fig.data)

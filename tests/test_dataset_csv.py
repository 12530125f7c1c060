import pandas as pd
import pytest

from pilite.analysis.fits import fit_pi_model
from pilite.core.data_model import MeasurementTable
from pilite.errors import DecodingError
from pilite.wire.dataset_csv import dataset_from_csv, dataset_to_csv


def test_names_are_quoted_and_escaped():
    text = dataset_to_csv([('Al "Ace" B', 1.5, 4.7), ('Bo, Jr', 2, 6.3)])
    assert text.splitlines() == [
        'Name,Diameter,Circumference',
        '"Al ""Ace"" B",1.5,4.7',
        '"Bo, Jr",2.0,6.3',
    ]


def test_missing_values_written_empty():
    text = dataset_to_csv(pd.DataFrame({'Name': ['x'], 'Diameter': [None], 'Circumference': ['abc']}))
    assert text.splitlines()[1] == '"x",,'


def test_parse_back():
    table = MeasurementTable.from_measurements([('Al "Ace"', 1.5, 4.7), ('Bo', 2, 6.3)])
    df = dataset_from_csv(table.to_csv())
    assert df['Name'].tolist() == ['Al "Ace"', 'Bo']
    assert df['Diameter'].tolist() == [1.5, 2.0]


def test_empty_field_surfaces_in_fit():
    df = dataset_from_csv('Name,Diameter,Circumference\n"a",1,3.1\n"b",,6.3\n"c",3,9.4')
    assert pd.isna(df.loc[1, 'Diameter'])
    res = fit_pi_model(df)
    assert not res.ok
    assert 'row(s) 2' in res.message


def test_header_only_gives_empty_frame():
    assert dataset_from_csv('Name,Diameter,Circumference\n').empty


@pytest.mark.parametrize('text', ['', 'Name,Size\n"a",1'])
def test_bad_csv_raises(text):
    with pytest.raises(DecodingError):
        dataset_from_csv(text)

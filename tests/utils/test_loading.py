import numpy as np
import pytest

from MLBatch.utils.loading import load_labeled_data, save_labeled_data


def test_load_directory_skips_hidden_files(tmp_path):
    (tmp_path / 'part-00000').write_text('1,2.0 3.0\n0,-1.0 0.5\n')
    (tmp_path / 'part-00001').write_text('\n0,0.0 -4.25\n')
    (tmp_path / '_SUCCESS').write_text('')
    (tmp_path / '.part-00000.crc').write_text('garbage')

    records = load_labeled_data(str(tmp_path))

    assert [label for label, _ in records] == [1, 0, 0]
    np.testing.assert_array_equal(records[2][1], [0.0, -4.25])
    assert records[0][1].dtype == np.float64


def test_save_then_load(tmp_path):
    path = str(tmp_path / 'data.txt')
    save_labeled_data([(1, np.array([0.1, 1e-7])), (0, np.array([-3.0, 2.5]))], path)

    records = load_labeled_data(path)
    np.testing.assert_array_equal(records[0][1], [0.1, 1e-7])
    assert records[1][0] == 0


@pytest.mark.parametrize("line", ['2,1.0 2.0', 'a,1.0', '1,1.0 x'])
def test_malformed_lines_report_location(tmp_path, line):
    path = tmp_path / 'data.txt'
    path.write_text('1,1.0 2.0\n' + line + '\n')

    with pytest.raises(ValueError, match='data.txt:2'):
        load_labeled_data(str(path))

from gempuzzle.systems.match import find_matches, find_runs


def test_horizontal_run_of_three():
    grid = [
        [0, 0, 0, 1],
        [1, 2, 3, 2],
        [2, 3, 1, 3],
    ]
    assert find_matches(grid) == {(0, 0), (0, 1), (0, 2)}


def test_vertical_run_of_three():
    grid = [
        [4, 1, 2],
        [4, 2, 1],
        [4, 1, 2],
        [0, 2, 1],
    ]
    assert find_matches(grid) == {(0, 0), (1, 0), (2, 0)}


def test_l_shape_is_union_of_both_runs():
    grid = [
        [3, 1, 2, 1],
        [3, 2, 1, 2],
        [3, 3, 3, 1],
        [1, 2, 1, 2],
    ]
    matches = find_matches(grid)
    assert matches == {(0, 0), (1, 0), (2, 0), (2, 1), (2, 2)}
    assert len(find_runs(grid)) == 2


def test_run_of_four_reports_all_positions():
    grid = [
        [1, 1, 1, 1, 0],
        [0, 2, 0, 2, 1],
    ]
    runs = find_runs(grid)
    assert len(runs) == 1
    assert runs[0].length == 4
    assert runs[0].orientation == "horizontal"
    assert runs[0].kind == 1


def test_two_in_a_row_is_not_a_match():
    grid = [
        [0, 0, 1],
        [1, 1, 0],
        [0, 2, 2],
    ]
    assert find_matches(grid) == set()


def test_empty_slots_break_runs():
    grid = [
        [2, 2, None, 2, 2],
        [None, None, None, 1, 0],
    ]
    assert find_matches(grid) == set()


def test_empty_grid_has_no_matches():
    assert find_matches([]) == set()

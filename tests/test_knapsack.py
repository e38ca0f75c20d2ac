from algorithms.knapsack import knapsack
from algorithms.stats import KnapsackStats
from board import Item, new_board
from conftest import drain, textbook_board


def tagged(board, state):
    return {
        (i, j)
        for i, row in enumerate(board.matrix)
        for j, cell in enumerate(row)
        if cell.state == state
    }


def test_textbook_instance_is_seven() -> None:
    stats = KnapsackStats()
    steps = drain(knapsack, textbook_board(), stats)
    final = steps[-1]

    assert final.is_final
    assert final.snapshot.optimal_value == 7
    assert final.description == "Optimal value: 7"
    assert stats.max_value == 7
    assert stats.remaining_capacity == 0


def test_one_step_per_cell_plus_new_maxima() -> None:
    steps = drain(knapsack, textbook_board(), KnapsackStats())
    maxima = [s for s in steps if s.description.startswith("New maximum")]

    # 3 items x capacity 5, three improvements (3, 4, 7) and the terminal step
    assert len(maxima) == 3
    assert len(steps) == 15 + 3 + 1


def test_each_cell_step_tags_the_cell_and_its_predecessors() -> None:
    steps = drain(knapsack, textbook_board(), KnapsackStats())

    # item 1 (weight 2) cannot fit capacity 1: only the row above is read
    assert tagged(steps[0].snapshot, "active") == {(1, 1)}
    assert tagged(steps[0].snapshot, "visited") == {(0, 1)}

    # item 1 fits capacity 2: both dp[0][2] and dp[0][0] are read
    assert tagged(steps[1].snapshot, "active") == {(1, 2)}
    assert tagged(steps[1].snapshot, "visited") == {(0, 2), (0, 0)}


def test_tags_are_reverted_before_the_next_cell() -> None:
    steps = drain(knapsack, textbook_board(), KnapsackStats())

    for step in steps[:-1]:
        assert len(tagged(step.snapshot, "active")) == 1
    assert not tagged(steps[-1].snapshot, "active")
    assert not tagged(steps[-1].snapshot, "visited")


def test_remaining_capacity_tracks_first_maximum() -> None:
    stats = KnapsackStats()
    gen = knapsack(textbook_board(), stats)
    for step in gen:
        if step.description.startswith("New maximum 3"):
            break

    assert stats.max_value == 3
    assert stats.remaining_capacity == 3


def test_zero_capacity_yields_only_the_terminal_step() -> None:
    stats = KnapsackStats()
    steps = drain(knapsack, new_board([Item(0, 2, 3)], capacity=0), stats)

    assert len(steps) == 1
    assert steps[0].snapshot.optimal_value == 0
    assert stats.max_value == 0


def test_no_items_yields_only_the_terminal_step() -> None:
    steps = drain(knapsack, new_board([], capacity=4), KnapsackStats())

    assert len(steps) == 1
    assert steps[0].description == "Optimal value: 0"


def test_caller_board_is_not_mutated() -> None:
    board = textbook_board()
    drain(knapsack, board, KnapsackStats())

    assert board.optimal_value == 0
    assert not any(item.selected for item in board.items)


def test_matrix_snapshots_are_independent() -> None:
    steps = drain(knapsack, textbook_board(), KnapsackStats())
    steps[0].snapshot.matrix[3][5].value = 99

    assert steps[-1].snapshot.optimal_value == 7

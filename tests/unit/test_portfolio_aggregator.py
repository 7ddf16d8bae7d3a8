import pytest

from dashboard.domain.models import Holding
from dashboard.domain.services.portfolio_aggregator import aggregate, percent_of


def _holding(sector, investment, present_value, symbol="X", qty=1):
    return Holding(
        no=1,
        name=symbol,
        sector=sector,
        purchase_price=investment / qty if qty else 0.0,
        qty=qty,
        investment=investment,
        symbol=symbol,
        cmp=present_value / qty if qty else 0.0,
        present_value=present_value,
    )


def test_aggregate_example_portfolio():
    holdings = [
        _holding("IT", 1000, 1200, "INFY"),
        _holding("IT", 500, 400, "WIPRO"),
        _holding("Auto", 2000, 2000, "TATAMOTORS"),
    ]

    snapshot = aggregate(holdings)

    assert snapshot.total_investment == 3500
    assert snapshot.total_present_value == 3600
    assert snapshot.total_gain_loss == 100
    assert snapshot.total_gain_loss_percent == pytest.approx(2.857142857)

    it, auto = snapshot.sectors
    assert it.sector == "IT"
    assert it.total_investment == 1500
    assert it.total_present_value == 1600
    assert it.total_gain_loss == 100
    assert it.total_gain_loss_percent == pytest.approx(6.6666667)
    assert it.portfolio_percent == pytest.approx(42.857142857)

    assert auto.sector == "Auto"
    assert auto.total_gain_loss == 0
    assert auto.total_gain_loss_percent == 0
    assert auto.portfolio_percent == pytest.approx(57.142857143)


def test_aggregate_derives_per_holding_fields():
    snapshot = aggregate([
        _holding("IT", 1000, 1200, "INFY"),
        _holding("IT", 500, 400, "WIPRO"),
        _holding("Auto", 2000, 2000, "TATAMOTORS"),
    ])
    infy, wipro, tata = snapshot.holdings

    assert infy.gain_loss == 200
    assert infy.gain_loss_percent == pytest.approx(20.0)
    assert infy.portfolio_percent == pytest.approx(28.571428571)
    assert wipro.gain_loss == -100
    assert wipro.gain_loss_percent == pytest.approx(-20.0)
    assert tata.gain_loss_percent == 0


def test_aggregate_partitions_holdings_by_first_seen_sector():
    holdings = [
        _holding("Power", 100, 110, "TATAPOWER"),
        _holding("Banks", 200, 190, "HDFCBANK"),
        _holding("Power", 300, 330, "KPIGREEN"),
        _holding("Banks", 400, 420, "ICICIBANK"),
        _holding("Tech", 500, 500, "AFFLE"),
    ]

    snapshot = aggregate(holdings)

    assert [s.sector for s in snapshot.sectors] == ["Power", "Banks", "Tech"]
    assert [h.symbol for h in snapshot.sectors[0].holdings] == ["TATAPOWER", "KPIGREEN"]
    assert [h.symbol for h in snapshot.sectors[1].holdings] == ["HDFCBANK", "ICICIBANK"]

    members = [h.symbol for s in snapshot.sectors for h in s.holdings]
    assert sorted(members) == sorted(h.symbol for h in holdings)
    assert len(members) == len(holdings)


def test_aggregate_zero_investment_yields_zero_percentages():
    snapshot = aggregate([
        _holding("IT", 0, 0, "A", qty=0),
        _holding("IT", 0, 50, "B"),
    ])

    assert snapshot.total_investment == 0
    assert snapshot.total_gain_loss_percent == 0
    assert snapshot.sectors[0].portfolio_percent == 0
    assert snapshot.sectors[0].total_gain_loss_percent == 0
    for holding in snapshot.holdings:
        assert holding.portfolio_percent == 0
        assert holding.gain_loss_percent == 0


def test_aggregate_empty_portfolio():
    snapshot = aggregate([])

    assert snapshot.sectors == []
    assert snapshot.holdings == []
    assert snapshot.total_investment == 0
    assert snapshot.total_gain_loss_percent == 0


def test_aggregate_is_idempotent(make_holding):
    holdings = [
        make_holding("HDFCBANK", purchase_price=1490, qty=50, cmp=1650.5),
        make_holding("AFFLE", sector="Tech Sector", purchase_price=1151, qty=50, cmp=1400.3),
    ]

    assert aggregate(holdings) == aggregate(holdings)
    assert aggregate(aggregate(holdings).holdings) == aggregate(holdings)


def test_aggregate_does_not_recompute_present_value(make_holding):
    # present value deliberately out of line with cmp × qty
    holding = make_holding("TCS", purchase_price=100, qty=10, cmp=120, present_value=1500)

    snapshot = aggregate([holding])

    assert snapshot.total_present_value == 1500
    assert snapshot.holdings[0].present_value == 1500
    assert snapshot.holdings[0].investment == 1000


def test_percent_of_zero_denominator():
    assert percent_of(10, 0) == 0
    assert percent_of(10, -5) == 0
    assert percent_of(25, 200) == 12.5

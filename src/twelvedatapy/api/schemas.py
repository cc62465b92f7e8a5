# twelvedatapy/api/schemas.py
"""
Pydantic models for the provider's JSON response structures.

Numeric fields the provider may send as ``null`` are ``Optional``. A field
sent as ``null`` is recorded in ``model_fields_set`` while an absent field is
not, so ``model_dump(exclude_unset=True, by_alias=True)`` reproduces the
received JSON shape.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Common Base Models ---

class ResponseModel(BaseModel):
    """Base model for provider payloads."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ErrorEnvelope(ResponseModel):
    """Generic provider error body: ``{"code": int, "message": str, "status": str}``."""
    code: int = 0
    message: Optional[str] = None
    status: Optional[str] = None


# --- Reference Data Models ---

class Access(ResponseModel):
    global_: Optional[str] = Field(None, alias="global")
    plan: Optional[str] = None


class Stock(ResponseModel):
    symbol: Optional[str] = None
    name: Optional[str] = None
    currency: Optional[str] = None
    exchange: Optional[str] = None
    mic_code: Optional[str] = None
    country: Optional[str] = None
    type: Optional[str] = None
    access: Optional[Access] = None


class Stocks(ResponseModel):
    data: List[Stock] = []
    status: Optional[str] = None


class Exchange(ResponseModel):
    name: Optional[str] = None
    code: Optional[str] = None
    country: Optional[str] = None
    timezone: Optional[str] = None


class Exchanges(ResponseModel):
    data: List[Exchange] = []
    status: Optional[str] = None


class Index(ResponseModel):
    symbol: Optional[str] = None
    name: Optional[str] = None
    country: Optional[str] = None
    currency: Optional[str] = None


class Indices(ResponseModel):
    data: List[Index] = []
    status: Optional[str] = None


class Etf(ResponseModel):
    symbol: Optional[str] = None
    name: Optional[str] = None
    currency: Optional[str] = None
    exchange: Optional[str] = None
    mic_code: Optional[str] = None
    country: Optional[str] = None
    access: Optional[Access] = None


class Etfs(ResponseModel):
    data: List[Etf] = []
    status: Optional[str] = None


class MarketState(ResponseModel):
    name: Optional[str] = None
    code: Optional[str] = None
    country: Optional[str] = None
    is_market_open: bool = False
    time_to_open: Optional[str] = None
    time_to_close: Optional[str] = None


# --- Core Data Models ---

class TimeSeriesMeta(ResponseModel):
    symbol: Optional[str] = None
    interval: Optional[str] = None
    currency: Optional[str] = None
    exchange_timezone: Optional[str] = None
    exchange: Optional[str] = None
    mic_code: Optional[str] = None
    type: Optional[str] = None


class TimeSeriesValue(ResponseModel):
    # Prices are kept as the provider's fixed-precision decimal strings.
    datetime: Optional[str] = None
    open: Optional[str] = None
    high: Optional[str] = None
    low: Optional[str] = None
    close: Optional[str] = None
    volume: Optional[str] = None


class TimeSeries(ResponseModel):
    meta: Optional[TimeSeriesMeta] = None
    values: List[TimeSeriesValue] = []
    status: Optional[str] = None


class FiftyTwoWeek(ResponseModel):
    low: Optional[str] = None
    high: Optional[str] = None
    low_change: Optional[str] = None
    high_change: Optional[str] = None
    low_change_percent: Optional[str] = None
    high_change_percent: Optional[str] = None
    range: Optional[str] = None


class Quote(ResponseModel):
    symbol: Optional[str] = None
    name: Optional[str] = None
    exchange: Optional[str] = None
    mic_code: Optional[str] = None
    currency: Optional[str] = None
    datetime: Optional[str] = None
    timestamp: Optional[int] = None
    open: Optional[str] = None
    high: Optional[str] = None
    low: Optional[str] = None
    close: Optional[str] = None
    volume: Optional[str] = None
    previous_close: Optional[str] = None
    change: Optional[str] = None
    percent_change: Optional[str] = None
    average_volume: Optional[str] = None
    rolling_1d_change: Optional[str] = None
    rolling_7d_change: Optional[str] = None
    rolling_period_change: Optional[str] = None
    is_market_open: bool = False
    fifty_two_week: Optional[FiftyTwoWeek] = None
    extended_change: Optional[str] = None
    extended_percent_change: Optional[str] = None
    extended_price: Optional[str] = None
    extended_timestamp: Optional[int] = None


class QuoteErrorMeta(ResponseModel):
    symbol: Optional[str] = None
    interval: Optional[str] = None
    exchange: Optional[str] = None


class QuoteError(ResponseModel):
    """Per-symbol error entry of a multi-symbol quote response."""
    code: int = 0
    message: Optional[str] = None
    status: Optional[str] = None
    meta: Optional[QuoteErrorMeta] = None


class Quotes(ResponseModel):
    """Decoded quote call: successful quotes and per-symbol errors, both possibly populated."""
    data: List[Quote] = []
    errors: List[QuoteError] = []


class ExchangeRate(ResponseModel):
    symbol: Optional[str] = None
    rate: Optional[float] = None
    timestamp: Optional[int] = None


class MarketMover(ResponseModel):
    symbol: Optional[str] = None
    name: Optional[str] = None
    exchange: Optional[str] = None
    datetime: Optional[str] = None
    last: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    volume: Optional[int] = None
    change: Optional[float] = None
    percent_change: Optional[float] = None


class MarketMovers(ResponseModel):
    values: List[MarketMover] = []
    status: Optional[str] = None


# --- Fundamentals Models ---

class InstrumentMeta(ResponseModel):
    """The ``meta`` block shared by the fundamentals endpoints."""
    symbol: Optional[str] = None
    name: Optional[str] = None
    currency: Optional[str] = None
    exchange: Optional[str] = None
    mic_code: Optional[str] = None
    exchange_timezone: Optional[str] = None
    period: Optional[str] = None


class Profile(ResponseModel):
    symbol: Optional[str] = None
    name: Optional[str] = None
    exchange: Optional[str] = None
    mic_code: Optional[str] = None
    sector: Optional[str] = None
    industry: Optional[str] = None
    employees: Optional[int] = None
    website: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    ceo: Optional[str] = Field(None, alias="CEO")
    address: Optional[str] = None
    city: Optional[str] = None
    zip: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None


class InsiderTransaction(ResponseModel):
    full_name: Optional[str] = None
    position: Optional[str] = None
    date_reported: Optional[str] = None
    is_direct: bool = False
    shares: Optional[int] = None
    value: Optional[int] = None
    description: Optional[str] = None


class InsiderTransactions(ResponseModel):
    meta: Optional[InstrumentMeta] = None
    insider_transactions: List[InsiderTransaction] = []


class Dividend(ResponseModel):
    payment_date: Optional[str] = None
    amount: Optional[float] = None


class Dividends(ResponseModel):
    meta: Optional[InstrumentMeta] = None
    dividends: List[Dividend] = []


class Earning(ResponseModel):
    symbol: Optional[str] = None
    name: Optional[str] = None
    currency: Optional[str] = None
    exchange: Optional[str] = None
    mic_code: Optional[str] = None
    country: Optional[str] = None
    time: Optional[str] = None
    eps_estimate: Optional[float] = None
    eps_actual: Optional[float] = None
    difference: Optional[float] = None
    surprise_prc: Optional[float] = None


class Earnings(ResponseModel):
    """Earnings calendar keyed by ``YYYY-MM-DD`` date."""
    earnings: Dict[str, List[Earning]] = {}
    status: Optional[str] = None


class StatisticsValuationsMetrics(ResponseModel):
    market_capitalization: Optional[int] = None
    enterprise_value: Optional[int] = None
    trailing_pe: Optional[float] = None
    forward_pe: Optional[float] = None
    peg_ratio: Optional[float] = None
    price_to_sales_ttm: Optional[float] = None
    price_to_book_mrq: Optional[float] = None
    enterprise_to_revenue: Optional[float] = None
    enterprise_to_ebitda: Optional[float] = None


class StatisticsIncomeStatement(ResponseModel):
    revenue_ttm: Optional[int] = None
    revenue_per_share_ttm: Optional[float] = None
    quarterly_revenue_growth: Optional[float] = None
    gross_profit_ttm: Optional[int] = None
    ebitda: Optional[int] = None
    net_income_to_common_ttm: Optional[int] = None
    diluted_eps_ttm: Optional[float] = None
    quarterly_earnings_growth_yoy: Optional[float] = None


class StatisticsBalanceSheet(ResponseModel):
    revenue_ttm: Optional[int] = None
    total_cash_mrq: Optional[int] = None
    total_cash_per_share_mrq: Optional[float] = None
    total_debt_mrq: Optional[int] = None
    total_debt_to_equity_mrq: Optional[float] = None
    current_ratio_mrq: Optional[float] = None
    book_value_per_share_mrq: Optional[float] = None


class StatisticsCashFlow(ResponseModel):
    operating_cash_flow_ttm: Optional[int] = None
    levered_free_cash_flow_ttm: Optional[int] = None


class StatisticsFinancials(ResponseModel):
    fiscal_year_ends: Optional[str] = None
    most_recent_quarter: Optional[str] = None
    profit_margin: Optional[float] = None
    operating_margin: Optional[float] = None
    return_on_assets_ttm: Optional[float] = None
    return_on_equity_ttm: Optional[float] = None
    income_statement: StatisticsIncomeStatement = StatisticsIncomeStatement()
    balance_sheet: StatisticsBalanceSheet = StatisticsBalanceSheet()
    cash_flow: StatisticsCashFlow = StatisticsCashFlow()


class StockStatistics(ResponseModel):
    shares_outstanding: Optional[int] = None
    float_shares: Optional[int] = None
    avg_10_volume: Optional[int] = None
    avg_30_volume: Optional[int] = None
    shares_short: Optional[int] = None
    short_ratio: Optional[float] = None
    short_percent_of_shares_outstanding: Optional[float] = None
    percent_held_by_insiders: Optional[float] = None
    percent_held_by_institutions: Optional[float] = None


class StockPriceSummary(ResponseModel):
    fifty_two_week_low: Optional[float] = None
    fifty_two_week_high: Optional[float] = None
    fifty_two_week_change: Optional[float] = None
    beta: Optional[float] = None
    day_50_ma: Optional[float] = None
    day_200_ma: Optional[float] = None


class DividendsAndSplits(ResponseModel):
    forward_annual_dividend_rate: Optional[float] = None
    forward_annual_dividend_yield: Optional[float] = None
    trailing_annual_dividend_rate: Optional[float] = None
    trailing_annual_dividend_yield: Optional[float] = None
    five_year_average_dividend_yield: Optional[float] = Field(None, alias="5_year_average_dividend_yield")
    payout_ratio: Optional[float] = None
    dividend_date: Optional[str] = None
    ex_dividend_date: Optional[str] = None
    last_split_factor: Optional[str] = None
    last_split_date: Optional[str] = None


class StatisticsValues(ResponseModel):
    valuations_metrics: StatisticsValuationsMetrics = StatisticsValuationsMetrics()
    financials: StatisticsFinancials = StatisticsFinancials()
    stock_statistics: StockStatistics = StockStatistics()
    stock_price_summary: StockPriceSummary = StockPriceSummary()
    dividends_and_splits: DividendsAndSplits = DividendsAndSplits()


class Statistics(ResponseModel):
    meta: Optional[InstrumentMeta] = None
    statistics: StatisticsValues = StatisticsValues()


# Financial statements. Line items are nullable: the provider sends null for
# items a company does not report.

class IncomeStatementOperatingExpense(ResponseModel):
    research_and_development: Optional[int] = None
    selling_general_and_administrative: Optional[int] = None


class IncomeStatementNonOperatingInterest(ResponseModel):
    income: Optional[int] = None
    expense: Optional[int] = None


class IncomeStatementEntry(ResponseModel):
    fiscal_date: Optional[str] = None
    sales: Optional[int] = None
    cost_of_goods: Optional[int] = None
    gross_profit: Optional[int] = None
    operating_expense: IncomeStatementOperatingExpense = IncomeStatementOperatingExpense()
    operating_income: Optional[int] = None
    non_operating_interest: IncomeStatementNonOperatingInterest = IncomeStatementNonOperatingInterest()
    other_income_expense: Optional[int] = None
    pretax_income: Optional[int] = None
    income_tax: Optional[int] = None
    net_income: Optional[int] = None
    eps_basic: Optional[float] = None
    eps_diluted: Optional[float] = None
    basic_shares_outstanding: Optional[int] = None
    diluted_shares_outstanding: Optional[int] = None
    ebitda: Optional[int] = None


class IncomeStatement(ResponseModel):
    meta: Optional[InstrumentMeta] = None
    income_statement: List[IncomeStatementEntry] = []


class CurrentAssets(ResponseModel):
    cash: Optional[int] = None
    cash_equivalents: Optional[int] = None
    other_short_term_investments: Optional[int] = None
    accounts_receivable: Optional[int] = None
    other_receivables: Optional[int] = None
    inventory: Optional[int] = None
    other_current_assets: Optional[int] = None
    total_current_assets: Optional[int] = None


class NonCurrentAssets(ResponseModel):
    properties: Optional[int] = None
    land_and_improvements: Optional[int] = None
    machinery_furniture_equipment: Optional[int] = None
    leases: Optional[int] = None
    accumulated_depreciation: Optional[int] = None
    goodwill: Optional[int] = None
    intangible_assets: Optional[int] = None
    investments_and_advances: Optional[int] = None
    other_non_current_assets: Optional[int] = None
    total_non_current_assets: Optional[int] = None


class Assets(ResponseModel):
    current_assets: CurrentAssets = CurrentAssets()
    non_current_assets: NonCurrentAssets = NonCurrentAssets()
    total_assets: Optional[int] = None


class CurrentLiabilities(ResponseModel):
    accounts_payable: Optional[int] = None
    accrued_expenses: Optional[int] = None
    short_term_debt: Optional[int] = None
    deferred_revenue: Optional[int] = None
    other_current_liabilities: Optional[int] = None
    total_current_liabilities: Optional[int] = None


class NonCurrentLiabilities(ResponseModel):
    long_term_debt: Optional[int] = None
    provision_for_risks_and_charges: Optional[int] = None
    deferred_liabilities: Optional[int] = None
    other_non_current_liabilities: Optional[int] = None
    total_non_current_liabilities: Optional[int] = None


class Liabilities(ResponseModel):
    current_liabilities: CurrentLiabilities = CurrentLiabilities()
    non_current_liabilities: NonCurrentLiabilities = NonCurrentLiabilities()
    total_liabilities: Optional[int] = None


class ShareholdersEquity(ResponseModel):
    common_stock: Optional[int] = None
    retained_earnings: Optional[int] = None
    other_shareholders_equity: Optional[int] = None
    total_shareholders_equity: Optional[int] = None


class BalanceSheetEntry(ResponseModel):
    fiscal_date: Optional[str] = None
    assets: Assets = Assets()
    liabilities: Liabilities = Liabilities()
    shareholders_equity: ShareholdersEquity = ShareholdersEquity()


class BalanceSheet(ResponseModel):
    meta: Optional[InstrumentMeta] = None
    balance_sheet: List[BalanceSheetEntry] = []


class OperatingActivities(ResponseModel):
    net_income: Optional[int] = None
    depreciation: Optional[int] = None
    deferred_taxes: Optional[int] = None
    stock_based_compensation: Optional[int] = None
    other_non_cash_items: Optional[int] = None
    accounts_receivable: Optional[int] = None
    accounts_payable: Optional[int] = None
    other_assets_liabilities: Optional[int] = None
    operating_cash_flow: Optional[int] = None


class InvestingActivities(ResponseModel):
    capital_expenditures: Optional[int] = None
    net_intangibles: Optional[int] = None
    net_acquisitions: Optional[int] = None
    purchase_of_investments: Optional[int] = None
    sale_of_investments: Optional[int] = None
    other_investing_activity: Optional[int] = None
    investing_cash_flow: Optional[int] = None


class FinancingActivities(ResponseModel):
    long_term_debt_issuance: Optional[int] = None
    long_term_debt_payments: Optional[int] = None
    short_term_debt_issuance: Optional[int] = None
    common_stock_issuance: Optional[int] = None
    common_stock_repurchase: Optional[int] = None
    common_dividends: Optional[int] = None
    other_financing_charges: Optional[int] = None
    financing_cash_flow: Optional[int] = None


class CashFlowEntry(ResponseModel):
    fiscal_date: Optional[str] = None
    operating_activities: OperatingActivities = OperatingActivities()
    investing_activities: InvestingActivities = InvestingActivities()
    financing_activities: FinancingActivities = FinancingActivities()
    end_cash_position: Optional[int] = None
    income_tax_paid: Optional[int] = None
    interest_paid: Optional[int] = None
    free_cash_flow: Optional[int] = None


class CashFlow(ResponseModel):
    meta: Optional[InstrumentMeta] = None
    cash_flow: List[CashFlowEntry] = []


# --- Advanced Models ---

class Usage(ResponseModel):
    timestamp: Optional[str] = None
    current_usage: int = 0
    plan_limit: int = 0
    daily_usage: int = 0
    plan_daily_limit: int = 0


# --- Streaming Models ---

class PriceEvent(ResponseModel):
    """A price tick pushed over the WebSocket channel."""
    event: str
    symbol: Optional[str] = None
    currency: Optional[str] = None
    exchange: Optional[str] = None
    mic_code: Optional[str] = None
    type: Optional[str] = None
    timestamp: Optional[int] = None
    price: Optional[float] = None
    day_volume: Optional[int] = None

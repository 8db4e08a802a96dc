from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "TradingView Agent"
    app_version: str = "0.1.0"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    request_timeout_seconds: float = 8
    user_agent: str = "tradingview-agent/0.1"

    primary_base_url: str = "https://stooq.com/q/d/l/"
    secondary_base_url: str = "https://query1.finance.yahoo.com/v8/finance/chart/"

    chart_base_url: str = "https://www.tradingview.com/chart/"
    tv_chart_url: str | None = None
    tv_backtest_enabled: bool = False
    tv_headless: bool = False
    tv_step_wait_ms: int = 2500

    schema_version: str = "1.0"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


settings = Settings()

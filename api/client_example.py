"""
Example client for the REIT Analytics API.

Demonstrates how to connect to the API from a dashboard, notebook or
other application.
"""

import requests
from typing import Dict, List, Optional


class ReitDataClient:
    """
    Client for the REIT Analytics API.

    Usage:
        client = ReitDataClient("http://localhost:3000")
        reits = client.list_reits(sector="Retail", min_dividend_yield=4)
        valuation = client.get_valuation("O", discount_rate=0.08, growth_rate=0.02)
    """

    def __init__(self, api_url: str = "http://localhost:3000"):
        """
        Initialize API client.

        Args:
            api_url: Base URL of the API server
        """
        self.api_url = api_url.rstrip('/')
        self.session = requests.Session()

    def _get(self, endpoint: str, params: Dict = None):
        """Make GET request to API."""
        url = f"{self.api_url}{endpoint}"
        response = self.session.get(url, params=params)
        response.raise_for_status()
        return response.json()

    def _post(self, endpoint: str, payload: Dict):
        """Make POST request to API with a JSON body."""
        url = f"{self.api_url}{endpoint}"
        response = self.session.post(url, json=payload)
        response.raise_for_status()
        return response.json()

    # ----------------------------------------------------------------
    # Health & Info
    # ----------------------------------------------------------------

    def health_check(self) -> Dict:
        """Check API health and get data store statistics."""
        return self._get("/")

    def get_all_sectors(self) -> List[str]:
        """Get list of all available sectors."""
        return self._get("/sectors")

    # ----------------------------------------------------------------
    # REITs
    # ----------------------------------------------------------------

    def list_reits(
        self,
        sector: Optional[str] = None,
        min_dividend_yield: Optional[float] = None,
        sort_by: Optional[str] = None,
        order: Optional[str] = None
    ) -> List[Dict]:
        """
        List REIT snapshots with optional filters.

        Args:
            sector: Exact sector name (e.g. 'Retail')
            min_dividend_yield: Minimum dividend yield in percent
            sort_by: 'ticker', 'dividendYield' or 'totalReturn1Y'
            order: 'asc' or 'desc'

        Returns:
            List of snapshot dicts (camelCase keys)
        """
        params = {}
        if sector:
            params['sector'] = sector
        if min_dividend_yield is not None:
            params['minDividendYield'] = min_dividend_yield
        if sort_by:
            params['sortBy'] = sort_by
        if order:
            params['order'] = order

        return self._get("/reits", params)

    def get_summary(
        self,
        sector: Optional[str] = None,
        min_dividend_yield: Optional[float] = None
    ) -> Dict:
        """Get count, average yield and best performer for a filtered list."""
        params = {}
        if sector:
            params['sector'] = sector
        if min_dividend_yield is not None:
            params['minDividendYield'] = min_dividend_yield

        return self._get("/reits/summary", params)

    def get_reit(self, ticker: str) -> Dict:
        """Get a single REIT snapshot."""
        return self._get(f"/reits/{ticker}")

    def get_history(self, ticker: str) -> List[Dict]:
        """Get the price history for a REIT, oldest first."""
        return self._get(f"/reits/{ticker}/history")

    # ----------------------------------------------------------------
    # Valuation
    # ----------------------------------------------------------------

    def get_valuation(
        self,
        ticker: str,
        discount_rate: float = 0.08,
        growth_rate: float = 0.02
    ) -> Dict:
        """
        Run a Gordon Growth DDM valuation.

        Args:
            ticker: REIT ticker
            discount_rate: Required return r (decimal, 0.08 = 8%)
            growth_rate: Dividend growth g (decimal)

        Returns:
            Valuation dict with currentPrice, fairValue, marginOfSafetyPct, ...
        """
        payload = {
            'discountRate': discount_rate,
            'growthRate': growth_rate
        }
        return self._post(f"/reits/{ticker}/valuation", payload)

    def get_sensitivity(
        self,
        ticker: str,
        discount_rate: float = 0.08,
        growth_rate: float = 0.02,
        step: Optional[float] = None
    ) -> Dict:
        """Get the fair value grid around the given assumptions."""
        params = {
            'discountRate': discount_rate,
            'growthRate': growth_rate
        }
        if step is not None:
            params['step'] = step

        return self._get(f"/reits/{ticker}/valuation/sensitivity", params)


# ----------------------------------------------------------------
# Example Usage
# ----------------------------------------------------------------

if __name__ == "__main__":
    # Initialize client
    client = ReitDataClient("http://localhost:3000")

    print("=" * 60)
    print("REIT Analytics API - Client Examples")
    print("=" * 60)

    # Health check
    print("\n1. Health Check")
    health = client.health_check()
    print(f"   Service: {health['service']}")
    print(f"   Status: {health['status']}")
    print(f"   REITs: {health['stats']['total_reits']}")

    # High-yield screen
    print("\n2. REITs yielding 4%+, highest first")
    for reit in client.list_reits(min_dividend_yield=4, sort_by="dividendYield", order="desc"):
        print(f"   {reit['ticker']:<5} {reit['name']:<28} {reit['dividendYield']:.2f}%")

    # Valuation
    print("\n3. DDM Valuation for O (r=8%, g=2%)")
    val = client.get_valuation("O", 0.08, 0.02)
    print(f"   Price: ${val['currentPrice']:.2f}")
    print(f"   Fair value: ${val['fairValue']:.2f}")
    print(f"   Margin of safety: {val['marginOfSafetyPct']:+.1f}%")

    print("\n" + "=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)

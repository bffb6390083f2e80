"""
FastAPI application for the REIT Analytics API.

Serves REIT snapshots, price history and Gordon Growth DDM valuations,
with auto-generated OpenAPI documentation at /docs.
"""

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Optional, List
import logging

from analytics.errors import InvalidAssumptionError, NoHistoryError, ReitNotFoundError
from models import (
    ReitHistorySnapshot,
    ReitSnapshot,
    ReitSummary,
    SensitivityGrid,
    SortKey,
    SortOrder,
    ValuationResult,
)
from .config import settings
from .data_access import ReitDataProvider
from .models import ErrorResponse, HealthResponse, ValuationRequest

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

NOT_FOUND_RESPONSES = {404: {"model": ErrorResponse}}
VALUATION_RESPONSES = {400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


def create_app(data: Optional[ReitDataProvider] = None) -> FastAPI:
    """
    Build the FastAPI application around a data provider.

    Args:
        data: Provider to serve from (defaults to the configured JSON files)
    """
    if data is None:
        try:
            data = ReitDataProvider()
        except Exception as e:
            logger.error(f"Failed to load REIT data: {e}")
            raise

    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # Enable CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request, exc):
        """Render every HTTP error as {"error": message}."""
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    # ----------------------------------------------------------------
    # Health & Info
    # ----------------------------------------------------------------

    @app.get("/", response_model=HealthResponse, tags=["Health"])
    def root():
        """
        API health check and information.

        Returns service status and data store statistics.
        """
        try:
            return {
                "service": settings.API_TITLE,
                "version": settings.API_VERSION,
                "status": "healthy",
                "snapshot_file": getattr(data.snapshot_repo, "file_path", None),
                "history_file": getattr(data.history_repo, "file_path", None),
                "stats": data.get_stats()
            }
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            raise HTTPException(status_code=500, detail="Health check failed")

    @app.get("/sectors", response_model=List[str], tags=["REITs"])
    def get_all_sectors():
        """Get the distinct sectors, sorted."""
        try:
            return data.get_all_sectors()
        except Exception as e:
            logger.error(f"Error fetching sectors: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch sectors")

    # ----------------------------------------------------------------
    # REIT Endpoints
    # ----------------------------------------------------------------

    @app.get("/reits", response_model=List[ReitSnapshot], tags=["REITs"])
    def list_reits(
        sector: Optional[str] = Query(None, description="Exact sector name (e.g. 'Retail')"),
        min_dividend_yield: Optional[float] = Query(None, alias="minDividendYield", description="Minimum dividend yield in percent (inclusive)"),
        sort_by: Optional[SortKey] = Query(None, alias="sortBy", description="Sort key"),
        order: Optional[SortOrder] = Query(None, description="Sort direction (default asc)")
    ):
        """
        List REIT snapshots.

        Without `sortBy` the list is ordered by ticker ascending.
        """
        try:
            return data.list_reits(
                sector=sector,
                min_dividend_yield=min_dividend_yield,
                sort_by=sort_by,
                order=order
            )
        except Exception as e:
            logger.error(f"Error listing REITs: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch REITs")

    @app.get("/reits/summary", response_model=ReitSummary, tags=["REITs"])
    def get_summary(
        sector: Optional[str] = Query(None, description="Exact sector name"),
        min_dividend_yield: Optional[float] = Query(None, alias="minDividendYield", description="Minimum dividend yield in percent")
    ):
        """Count, average dividend yield and best 1Y performer over the filtered list."""
        try:
            return data.get_summary(sector=sector, min_dividend_yield=min_dividend_yield)
        except Exception as e:
            logger.error(f"Error summarizing REITs: {e}")
            raise HTTPException(status_code=500, detail="Failed to summarize REITs")

    @app.get("/reits/{ticker}", response_model=ReitSnapshot, responses=NOT_FOUND_RESPONSES, tags=["REITs"])
    def get_reit(ticker: str):
        """
        Get a single REIT snapshot.

        Args:
            ticker: REIT ticker symbol (case-insensitive, e.g. 'O')
        """
        try:
            return data.get_reit(ticker.upper())
        except ReitNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except Exception as e:
            logger.error(f"Error fetching REIT {ticker}: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch REIT details")

    @app.get("/reits/{ticker}/history", response_model=List[ReitHistorySnapshot], responses=NOT_FOUND_RESPONSES, tags=["History"])
    def get_history(ticker: str):
        """Get the price history for a REIT, oldest first."""
        try:
            return data.get_history(ticker.upper())
        except (ReitNotFoundError, NoHistoryError) as e:
            raise HTTPException(status_code=404, detail=str(e))
        except Exception as e:
            logger.error(f"Error fetching history for {ticker}: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch REIT history")

    # ----------------------------------------------------------------
    # Valuation Endpoints
    # ----------------------------------------------------------------

    def _valuation(ticker: str, discount_rate: float, growth_rate: float) -> ValuationResult:
        try:
            return data.get_valuation(ticker.upper(), discount_rate, growth_rate)
        except InvalidAssumptionError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except (ReitNotFoundError, NoHistoryError) as e:
            raise HTTPException(status_code=404, detail=str(e))
        except Exception as e:
            logger.error(f"Error valuing {ticker}: {e}")
            raise HTTPException(status_code=500, detail="Failed to calculate valuation")

    @app.get("/reits/{ticker}/valuation", response_model=ValuationResult, responses=VALUATION_RESPONSES, tags=["Valuation"])
    def get_valuation(
        ticker: str,
        discount_rate: float = Query(settings.DEFAULT_DISCOUNT_RATE, alias="discountRate", description="Required return r (decimal)"),
        growth_rate: float = Query(settings.DEFAULT_GROWTH_RATE, alias="growthRate", description="Dividend growth g (decimal)")
    ):
        """
        Value a REIT with the Gordon Growth dividend discount model.

        FairValue = DPS * (1 + g) / (r - g), at the latest price in its history.
        """
        return _valuation(ticker, discount_rate, growth_rate)

    @app.post("/reits/{ticker}/valuation", response_model=ValuationResult, responses=VALUATION_RESPONSES, tags=["Valuation"])
    def post_valuation(ticker: str, body: ValuationRequest):
        """Same as the GET form, with assumptions in a JSON body."""
        return _valuation(ticker, body.discount_rate, body.growth_rate)

    @app.get("/reits/{ticker}/valuation/sensitivity", response_model=SensitivityGrid, responses=VALUATION_RESPONSES, tags=["Valuation"])
    def get_sensitivity(
        ticker: str,
        discount_rate: float = Query(settings.DEFAULT_DISCOUNT_RATE, alias="discountRate"),
        growth_rate: float = Query(settings.DEFAULT_GROWTH_RATE, alias="growthRate"),
        step: float = Query(settings.SENSITIVITY_STEP, description="Spacing between grid rates (decimal)")
    ):
        """
        Fair value and margin of safety over a 5x5 grid of discount and
        growth rates centred on the given assumptions.
        """
        try:
            return data.get_sensitivity(ticker.upper(), discount_rate, growth_rate, step)
        except InvalidAssumptionError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except (ReitNotFoundError, NoHistoryError) as e:
            raise HTTPException(status_code=404, detail=str(e))
        except Exception as e:
            logger.error(f"Error building sensitivity grid for {ticker}: {e}")
            raise HTTPException(status_code=500, detail="Failed to calculate sensitivity")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level="info"
    )

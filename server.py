from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
import logging
from contextlib import asynccontextmanager
import time

import config
from evaluate import evaluate_classifiers
from features import CUISINES
from inference import RecipeClassifier, load_classifier
from pipeline import STATIC_METRICS, build_recipe_response
from recipes import RecipeSource, build_recipe_source
from schemas import (
    HealthResponse,
    ImageRecipeRequest,
    ImageRecipeResponse,
    RecipeRequest,
    RecipeResponse,
)

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# ============================================================
# LIFESPAN MANAGEMENT
# ============================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting up...")

    try:
        classifier = load_classifier()
        app.state.classifier = classifier
        app.state.recipe_source = build_recipe_source()
        if config.LIVE_METRICS:
            app.state.metrics = evaluate_classifiers(classifier.models)
        else:
            app.state.metrics = STATIC_METRICS
        logger.info("Classifiers trained successfully")
        logger.info(f"Cuisines: {classifier.cuisines}")
    except Exception as e:
        logger.error(f"Failed to train classifiers: {e}")
        raise

    yield

    logger.info("Shutting down...")


# ============================================================
# CREATE APP
# ============================================================

app = FastAPI(
    title="Recipe Predictor API",
    description="Recipe suggestions annotated with cuisine and health predictions",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================
# DEPENDENCIES
# ============================================================

def get_classifier(request: Request) -> RecipeClassifier:
    classifier = getattr(request.app.state, "classifier", None)
    if classifier is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Models not loaded"
        )
    return classifier


def get_recipe_source(request: Request) -> RecipeSource:
    return getattr(request.app.state, "recipe_source", None) or RecipeSource()


def get_metrics(request: Request):
    return getattr(request.app.state, "metrics", None) or STATIC_METRICS


# ============================================================
# ENDPOINTS
# ============================================================

@app.get("/", status_code=status.HTTP_200_OK)
async def root():
    return {
        "service": "Recipe Predictor API",
        "version": "1.0.0",
        "endpoints": {
            "health": "/health",
            "recipe": "/recipe",
            "image": "/image",
            "cuisines": "/cuisines",
        }
    }


@app.get("/health", response_model=HealthResponse, status_code=status.HTTP_200_OK)
async def health_check(classifier: RecipeClassifier = Depends(get_classifier)):
    return HealthResponse(
        status="healthy",
    )


@app.post("/recipe", response_model=RecipeResponse, status_code=status.HTTP_200_OK)
def create_recipes(
    request: RecipeRequest,
    classifier: RecipeClassifier = Depends(get_classifier),
    recipe_source: RecipeSource = Depends(get_recipe_source),
    metrics=Depends(get_metrics),
):
    """
    Cuisines: Indian, Italian, Chinese, Mexican, French

    Returns candidate recipes plus the Naive Bayes cuisine prediction and the
    Decision Tree health prediction for the submitted ingredients.
    """
    try:
        start_time = time.time()

        response = build_recipe_response(request, classifier, recipe_source, metrics)

        processing_time_ms = (time.time() - start_time) * 1000
        logger.info(f"Built {len(response.recipes)} recipes in {processing_time_ms:.2f}ms")

        return response

    except Exception as e:
        logger.error(f"Error during recipe generation: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Recipe generation failed"
        )


@app.post("/image", response_model=ImageRecipeResponse, status_code=status.HTTP_200_OK)
def create_recipe_with_images(
    request: ImageRecipeRequest,
    recipe_source: RecipeSource = Depends(get_recipe_source),
):
    if not recipe_source.has_generator:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Recipe generator not configured"
        )

    try:
        result = recipe_source.generate_recipe_with_images(
            request.ingredients, request.cuisine.value, request.style
        )
        return ImageRecipeResponse(**result)

    except Exception as e:
        logger.error(f"Recipe image generation failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate recipe. Please try again later."
        )


@app.get("/cuisines", status_code=status.HTTP_200_OK)
async def get_cuisines():
    return {
        "cuisines": list(CUISINES),
    }


# ============================================================
# MAIN
# ============================================================

if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Recipe Predictor API")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--workers", type=int, default=1, help="Number of worker processes")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")

    args = parser.parse_args()

    logger.info(f"Starting server on {args.host}:{args.port}")

    uvicorn.run(
        "server:app",
        host=args.host,
        port=args.port,
        workers=args.workers,
        reload=args.reload,
        log_level="info"
    )

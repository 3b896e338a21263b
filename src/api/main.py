from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.routes.corpus import router as corpus_router

app = FastAPI(
    title="Meeting Corpus API",
    description="Natural-language and sequence-tagging training data from meeting listings",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
    ],
    allow_origin_regex=r"http://localhost:\d+",
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(corpus_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}

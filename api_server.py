from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import List, Dict, Any, Optional
import uvicorn

from assetgraph.config import settings
from assetgraph.ingest import CsvRecordIngestor, IngestionError, parse_seed_list
from assetgraph.query import GraphQueryService
from assetgraph.types import ParseResult
from assetgraph.utils.logger import app_logger


logger = app_logger.bind(component="api_server")

app = FastAPI(title="Asset Graph API", version="0.1.0")

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class DatasetStore:
    """Holds the currently loaded record set; replaced wholesale on upload."""

    def __init__(self):
        self.parse_result: Optional[ParseResult] = None
        self.service: Optional[GraphQueryService] = None

    def load(self, parse_result: ParseResult):
        self.parse_result = parse_result
        self.service = GraphQueryService(parse_result)

    def clear(self):
        self.parse_result = None
        self.service = None

    def require(self) -> GraphQueryService:
        if self.service is None:
            raise HTTPException(status_code=409, detail="No dataset loaded")
        return self.service


store = DatasetStore()
ingestor = CsvRecordIngestor()

if settings.dataset_path:
    try:
        store.load(ingestor.parse_file(settings.dataset_path))
    except IngestionError as e:
        logger.error(f"Error preloading dataset: {e}")


class DatasetRequest(BaseModel):
    csv_text: str


class GraphRequest(BaseModel):
    seeds: str
    node_type: Optional[str] = None


class NodeRequest(BaseModel):
    seeds: str
    node_id: str


class SearchRequest(BaseModel):
    seeds: str
    query: str
    limit: int = Field(10, ge=0)


class SearchResponse(BaseModel):
    results: List[str]
    total_results: int


@app.post("/api/dataset")
async def load_dataset(request: DatasetRequest) -> Dict[str, Any]:
    """Replace the loaded dataset with the given CSV content."""
    try:
        parse_result = ingestor.parse_text(request.csv_text)
    except IngestionError as e:
        logger.error(f"Error loading dataset: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    store.load(parse_result)
    return parse_result.to_dict()


@app.post("/api/graph")
async def get_graph(request: GraphRequest) -> Dict[str, Any]:
    """Extract the subgraph for the given seeds with islands and statistics."""
    service = store.require()
    return service.summary(parse_seed_list(request.seeds), request.node_type)


@app.post("/api/node")
async def get_node_details(request: NodeRequest) -> Dict[str, Any]:
    """Get details and path classification of one node of the extracted graph."""
    service = store.require()
    seeds = parse_seed_list(request.seeds)
    details = service.node_details(service.extract(seeds), request.node_id, seeds)
    if details is None:
        raise HTTPException(status_code=404, detail="Node not found")
    return details


@app.post("/api/search", response_model=SearchResponse)
async def search_nodes(request: SearchRequest):
    """Search node ids of the extracted graph."""
    service = store.require()
    graph = service.extract(parse_seed_list(request.seeds))
    results = service.search_nodes(graph, request.query, request.limit)
    return SearchResponse(results=results, total_results=len(results))


@app.get("/api/stats")
async def get_stats() -> Dict[str, Any]:
    """Get ingestion statistics of the loaded dataset."""
    store.require()
    return store.parse_result.to_dict()


if __name__ == "__main__":
    logger.info("Starting Asset Graph API server")

    uvicorn.run(
        "api_server:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level="info"
    )

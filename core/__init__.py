"""
Product Radar core package.

Modules
───────
models      — Pydantic data models (Product, ResearchResult)
errors      — Pipeline exception taxonomy
keywords    — Claude: topic → Product Hunt search tags
auth        — Product Hunt credential providers (static key / OAuth)
cache       — In-memory TTL cache for per-keyword results
search      — Product Hunt GraphQL search client
aggregator  — Bounded fan-out over keywords + deduplication
summarizer  — Claude: products → market analysis report
researcher  — Pipeline controller wiring the stages together
"""

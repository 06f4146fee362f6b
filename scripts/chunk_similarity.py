#!/usr/bin/env python3
"""Chunk-to-chunk similarity across notes.

Usage:
  Two-note mode (prints the cosine matrix and top-k matches per chunk):
    python scripts/chunk_similarity.py <note_id_a> <note_id_b> [--topk 3]

  Auto-pick the two oldest notes:
    python scripts/chunk_similarity.py [--topk 3]

  All-notes mode (top-k matches in other notes for every chunk):
    python scripts/chunk_similarity.py --all [--topk 3] [--min 0.3]

Reads the database at DATABASE_URL (same variable as the API).
"""
from __future__ import annotations

import argparse
import asyncio
import sys
from uuid import UUID

import numpy as np

from notelink.config import get_settings
from notelink.domain.entities import Note, NoteChunk
from notelink.domain.scoring import ChunkMatrix, similarity_matrix
from notelink.domain.scoring.matcher import truncate_text
from notelink.infrastructure.persistence.postgres.connection import create_pool
from notelink.infrastructure.persistence.postgres.unit_of_work import create_uow_factory


def top_k_per_row(matrix: np.ndarray, k: int, min_sim: float) -> list[list[tuple[int, float]]]:
    out: list[list[tuple[int, float]]] = []
    for row in matrix:
        order = sorted(range(len(row)), key=lambda j: row[j], reverse=True)
        out.append([(j, float(row[j])) for j in order[:k] if row[j] > 0 and row[j] >= min_sim])
    return out


def print_pair(a: Note, b: Note, a_chunks: list[NoteChunk], b_chunks: list[NoteChunk], topk: int, min_sim: float) -> None:
    print(f"A: {a.title} ({a.id}) chunks={len(a_chunks)}")
    print(f"B: {b.title} ({b.id}) chunks={len(b_chunks)}")
    ma = ChunkMatrix.from_chunks(a_chunks)
    mb = ChunkMatrix.from_chunks(b_chunks)
    if not len(ma) or not len(mb):
        print("One of the notes has no chunk embeddings. Nothing to compare.")
        return
    sims = similarity_matrix(ma, mb)

    print("\nCosine similarity matrix (rows=A chunks, cols=B chunks):")
    print("    " + " ".join(f"{j:>5}" for j in mb.orders))
    for i, order in enumerate(ma.orders):
        print(f"{order:>3}: " + " ".join(f"{v:5.3f}" for v in sims[i]))

    print(f"\nTop-{topk} matches per A chunk:")
    for i, row in enumerate(top_k_per_row(sims, topk, min_sim)):
        items = ", ".join(f"B#{mb.orders[j]} (cos={v:.3f})" for j, v in row)
        print(f"  A#{ma.orders[i]} -> {items or '(none)'}")

    print(f"\nTop-{topk} matches per B chunk:")
    for j, row in enumerate(top_k_per_row(sims.T, topk, min_sim)):
        items = ", ".join(f"A#{ma.orders[i]} (cos={v:.3f})" for i, v in row)
        print(f"  B#{mb.orders[j]} -> {items or '(none)'}")


def print_all(notes: list[Note], chunks_by_note: dict[UUID, list[NoteChunk]], topk: int, min_sim: float) -> None:
    print(f"Scanning {len(notes)} notes...")
    matrices = {n.id: ChunkMatrix.from_chunks(chunks_by_note.get(n.id, [])) for n in notes}
    titles = {n.id: n.title for n in notes}
    for src in notes:
        ms = matrices[src.id]
        for i, order in enumerate(ms.orders):
            row_source = ChunkMatrix(ms.dimension, (order,), (ms.texts[i],), ms.unit_vectors[i : i + 1])
            candidates: list[tuple[float, UUID, int, str]] = []
            for other in notes:
                if other.id == src.id:
                    continue
                mt = matrices[other.id]
                sims = similarity_matrix(row_source, mt)
                for j in range(len(mt)):
                    if sims.size and sims[0, j] >= min_sim:
                        candidates.append((float(sims[0, j]), other.id, mt.orders[j], mt.texts[j]))
            candidates.sort(key=lambda c: c[0], reverse=True)
            top = candidates[:topk]
            if not top:
                continue
            print(f"\nNote: {src.title} ({src.id})  chunk#{order}")
            print(f'  Src: "{truncate_text(ms.texts[i], 120)}"')
            for sim, nid, t_order, text in top:
                print(f"  -> cos={sim:.3f}  Note: {titles[nid]} ({nid}) chunk#{t_order}")
                print(f'     "{truncate_text(text, 120)}"')


async def run(args: argparse.Namespace) -> int:
    pool = create_pool(get_settings().database_url, min_size=1, max_size=2)
    await pool.open()
    try:
        uow_factory = create_uow_factory(pool)
        async with uow_factory() as uow:
            if args.all:
                notes = await uow.notes.list_all()
                if not notes:
                    print("No notes found in the database.", file=sys.stderr)
                    return 1
                chunks = await uow.chunks.get_by_note_ids([n.id for n in notes])
                print_all(notes, chunks, args.topk, args.min)
                print("\nDone.")
                return 0

            if args.note_a and args.note_b:
                a = await uow.notes.get_by_id(UUID(args.note_a))
                b = await uow.notes.get_by_id(UUID(args.note_b))
            else:
                oldest = (await uow.notes.list_all())[:2]
                if len(oldest) < 2:
                    print("Need at least two notes in the database to compare.", file=sys.stderr)
                    return 1
                a, b = oldest
                print(f"Auto-selected notes: A={a.id}, B={b.id}")
            if a is None or b is None:
                print("Note not found.", file=sys.stderr)
                return 1
            chunks = await uow.chunks.get_by_note_ids([a.id, b.id])
        print_pair(a, b, chunks[a.id], chunks[b.id], args.topk, args.min)
        print("\nDone.")
        return 0
    finally:
        await pool.close()


def main() -> int:
    parser = argparse.ArgumentParser(description="Chunk-to-chunk similarity across notes")
    parser.add_argument("note_a", nargs="?", help="First note id")
    parser.add_argument("note_b", nargs="?", help="Second note id")
    parser.add_argument("--all", action="store_true", help="Compare every chunk with all other notes")
    parser.add_argument("--topk", type=int, default=3, help="Matches to print per chunk")
    parser.add_argument("--min", type=float, default=0.0, help="Minimum cosine to print")
    args = parser.parse_args()
    args.topk = max(1, args.topk)
    args.min = min(1.0, max(0.0, args.min))
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())

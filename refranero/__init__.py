"""
refranero: scrape the Centro Virtual Cervantes "Refranero multilingüe".

The package has two modes, wired together by `refranero.cli`:

1. **collect.slugs** – Fetch the listing page of every letter of the
   alphabetical index in parallel and stream the slug of every refrán
   found there.
2. **collect.runner** – Feed a stream of slugs to a fixed pool of
   worker threads.  Each worker fetches the slug's detail page (see
   **ingest**) and extracts the idiom, usage marker and definition
   (see **normalize.sections**) into a `Record`.  Fetch failures become
   records carrying the error; they never stop the pool.
3. **normalize.write_tsv** – Print slugs one per line, or records as
   tab-separated rows under the header ``Refran  Significado  Uso``.

All run settings are held in an immutable `refranero.config.Config`
built once at startup.
"""

__version__ = "0.1.0"

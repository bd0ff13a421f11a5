# puredns

Building blocks for fast subdomain resolution and DNS wildcard filtering.

The package runs the `massdns` binary to resolve large domain lists at a
controlled rate. It then removes subdomains whose answers come only from DNS
wildcards, and it checks those subdomains against trusted resolvers.

## Installation

```
pip install puredns
```

Bulk resolution needs the `massdns` binary. It must be on your `PATH`, or you
must pass its full path.

## Resolving with massdns

```python
from puredns.massdns.resolver import Resolver

resolver = Resolver("massdns")
with open("domains.txt", "rb") as domains:
    resolver.resolve(domains, "massdns.txt", "resolvers.txt", 500)
print(resolver.current(), "domains sent")
```

`Resolver.resolve` starts massdns with `-o Snl -t A`. It passes the resolvers
file with `-r` and the output file with `-w`, and retries on `REFUSED` and
`SERVFAIL`. It blocks until massdns exits. A non-zero exit status raises
`subprocess.CalledProcessError`. You can pass your own `Runner` through the
`runner` argument. `DefaultRunner.create_args` returns the argument list.

Domains reach massdns through a `puredns.massdns.linereader.LineReader`. It
limits how many lines are released per second, so the query rate stays close to
the requested `qps`. A `qps` of 0 turns the limit off. `LineReader.read`
returns `None` while the limit holds lines back and `b""` at the end of input.

## Processing massdns output

`DefaultWriteCallback` parses `massdns -o Snl` lines. It writes each valid
domain once to a domain file and its A, AAAA and CNAME records to a records
file. An empty file name turns that file off. `StdoutHandler` splits raw output
bytes into lines and passes them to a callback:

```python
from puredns.massdns.callback import DefaultWriteCallback
from puredns.massdns.stdouthandler import StdoutHandler

with DefaultWriteCallback("records.txt", "valid.txt") as callback:
    handler = StdoutHandler(callback)
    handler.write(b"www.example.com. A 127.0.0.1\n")
print(callback.found())
```

`puredns.massdns.records` has `JSONRecord`, `JSONResponseData` and
`JSONResponse`. Each is built with `from_dict` from a decoded line of the
massdns JSON output format.

## Filtering wildcards

```python
import io
from puredns.wildcarder.wildcarder import Wildcarder

wildcarder = Wildcarder(thread_count=10, test_count=3)
domains, roots = wildcarder.filter(io.StringIO("www.example.com\nstore.example.com\n"))
print(wildcarder.query_count(), "queries")
```

`filter` takes one domain per line and skips blank lines. It returns the domains
that are not wildcards, together with the wildcard roots it found. Calling it
while another run on the same object is in progress raises `RuntimeError`.

The default resolver is `ClientDNS`. It sends A queries over UDP to 8.8.8.8 and
8.8.4.4 with retries and a rate limit. Any `DNSResolver` can take its place
through the `resolver` argument.

You can pass a `DNSCache` filled from earlier results as `precache`, or set it
later on the `precache` attribute. The filter then makes fewer queries and
still confirms doubtful answers with the trusted resolver.

## Progress reporting

`puredns.progress.progressbar.ProgressBar` redraws a terminal progress bar from
a background thread between `start()` and `stop()`. By default it writes to
standard error. The bar is rendered from a template whose `{{ name }}`
placeholders are filled from its variables: `eta`, `bar`, `current`, `total`,
`rate`, `percent`, `time`, plus any you set with `set`. The rate is a moving
average computed by `puredns.progress.movingrate.MovingRate`. Colors and
characters come from `puredns.progress.style.Style`.

## Other utilities

- `puredns.threadpool.ThreadPool` is a fixed pool of worker threads fed by a
  bounded queue. It runs `Runnable` tasks and can be used as a context manager.
- `puredns.procreader.ProcReader` is a readable stream whose data comes from a
  callback.
- `puredns.shellexecutor.ShellExecutor` runs a program silently and raises if it
  exits with an error.

## What it does not do

The package has no command-line program. It is a library, and you combine its
parts in your own code. It does not download or check resolver lists, and it
does not read massdns output files back into a `DNSCache`. `DefaultRunner` does
not capture massdns standard output: the results go only to the file given with
`-w`.
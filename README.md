# minimr

`minimr` is a very small MapReduce system. It runs as three processes on one
machine, and they talk to each other over TCP sockets:

- **master** (`minimr-master`) listens on port 9001. It waits for a job. When
  one arrives, it sends the map phase to the worker. It then waits for the
  worker's answer and sends the reduce phase.
- **worker** (`minimr-worker`) listens on port 9002. For a map phase it runs
  the mapper and then replies `OK` to the master. For a reduce phase it runs
  the shuffle and then the reducer, and writes the result to the output path.
- **submit** (`minimr-submit`) sends one job to the master.

## Installing

```
pip install .
```

## Running a job

Start the master and the worker, each in its own terminal:

```
minimr-master
minimr-worker
```

Then submit a job:

```
minimr-submit INPUT_PATH OUTPUT_PATH LOAD_PATH MAPPER_CLASS REDUCER_CLASS
```

- `INPUT_PATH`: a text file. The mapper gets it one line at a time.
- `OUTPUT_PATH`: the file the reduced results go to, one `key<TAB>value` per
  line. Missing parent directories are created.
- `LOAD_PATH`: passed along with the job. The worker does not use it (see
  below).
- `MAPPER_CLASS` / `REDUCER_CLASS`: the names under which the mapper and
  reducer classes are registered in the worker process.

The word-count classes ship with the package and the worker always registers
them:

```
minimr-submit words.txt counts.tsv . WordCountMapper WordCountReducer
```

### Command options

- `minimr-master`: `--port` (default 9001), `--worker-port` (default 9002),
  `--rounds N` (stop after N jobs; without it the master runs forever).
- `minimr-worker`: `--port` (default 9002), `--master-host` (default
  `127.0.0.1`), `--master-port` (default 9001), `--workdir` (default
  `/tmp/out`), `--max-jobs N` (stop after N messages). The worker prints each
  message it receives as `[field, field, ...]`. It reports a malformed message
  on stderr and skips it.
- `minimr-submit`: `--host` (default `127.0.0.1`), `--port` (default 9001).

When the master hands a phase to the worker and the worker is not listening
yet, the master retries the connection for up to five seconds.

### Intermediate files

The worker keeps its intermediate files in its working directory:

- `map_out.txt`: one `key value` pair per line.
- `shuffle_out.txt`: one group per line. The key comes first, then its values,
  and every field is followed by a single space.

The shuffle sorts the pairs and collects runs of *identical* `(key, value)`
pairs into a group. Pairs that share a key but have different values end up
in separate, adjacent groups. This is enough for the word count, where every
value is `"1"`.

## Writing a mapper and reducer

Subclass `Mapper` and `Reducer` from `minimr.base` and register each class by
name:

```python
from minimr.base import Mapper, Reducer, register_mapper, register_reducer


@register_mapper
class LineLengthMapper(Mapper):
    def map(self, line):
        return [(str(len(line)), "1")]


@register_reducer
class CountReducer(Reducer):
    def reduce(self, key, values):
        return key, str(sum(int(v) for v in values))
```

`get_mapper(name)` and `get_reducer(name)` return the registered class, or
raise `KeyError` if no class has that name. Registering a class that is not a
`Mapper` or `Reducer` subclass raises `TypeError`.

## Running the steps without the network

`minimr.tasks` works on its own:

- In memory: `map_lines(mapper, lines)`, `shuffle_pairs(pairs)` and
  `reduce_groups(reducer, groups)`.
- On files: `run_map(mapper, input_path, output_path)`,
  `run_shuffle(input_path, output_path)` and
  `run_reduce(reducer, input_path, output_path)`. These write the file formats
  described above.

`minimr.worker.run_job(Job.from_message(msg), workdir)` runs one phase of a
job message directly. `minimr.master.serve_once()` handles one submitted job.
`minimr.submit.build_message(...)` builds the message that `minimr-submit`
sends. `minimr.net` has the small `Client` and `Server` classes that carry
these messages. A message is read in one receive of at most 1024 bytes.

## What it does not do

- It does not load user code from `LOAD_PATH`. The worker can only run mapper
  and reducer classes that are registered in its own process. As shipped, that
  means `WordCountMapper` and `WordCountReducer`. To use other classes, run a
  worker from your own script that imports the module defining them and then
  calls `minimr.worker.main()`.
- There is one master and one worker. Nothing is split across machines,
  retried after a failure, or run in parallel.
# textdesk

textdesk provides text analysis functions, a binary wire protocol, and two
command-line tools that talk to a text-processing server over that protocol.

The text functions work on plain text and can:

- count the words in it,
- find its topic (Sport, Politică or Tehnologie). They use a naive Bayes
  classifier, and keyword matching is also available,
- write a short extractive summary, picking sentences by TF-IDF.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Using the library

The text functions are in `textdesk.nlp`:

```python
from textdesk.nlp import BayesClassifier, count_words, determine_topic, generate_summary

count_words("The match ended two to one.")
determine_topic("fotbal meci gol")            # "Sport"
generate_summary(text, 3, documents=[text])

classifier = BayesClassifier()
classifier.train("fotbal meci campionat", "Sport")
classifier.classify("un meci de fotbal")
```

`determine_topic` returns `"Necunoscut"` when no keyword matches.
`generate_summary` raises `ValueError` when the text holds no complete
sentence, meaning one that ends in `.`, `!` or `?`. The module also has
`tokenize_text`, `split_sentences`, `calculate_tf_idf` and `is_stopword`.

`textdesk.protocol` holds the wire format: `Request`, `Response`,
`AdminResponse`, `ClientInfo`, the `RequestType`, `StatusCode` and
`AdminCommand` enums, and the `send_*` / `receive_*` functions. Each of these
functions works on a connected socket. A failed exchange raises
`ProtocolError`.

## Sending a document

```
textdesk-client --count-words article.txt
textdesk-client --determine-topic article.txt
textdesk-client --generate-summary article.txt
```

The client connects to `127.0.0.1:12345` and sends the file. It then prints
the result and the processing time. The limit for a file is 65536 bytes.

## Administration

```
textdesk-admin --clients
textdesk-admin --queue-status
```

The admin tool connects to the Unix socket `/tmp/nlp_admin_socket`.
`--clients` lists each connected client with its address, its connection
time and how many requests it has made. `--queue-status` shows how many
requests are waiting and how many the queue can hold.

## What is not included

This package does not include the processing server. `textdesk-client` and
`textdesk-admin` only work when such a server is listening on
`127.0.0.1:12345` and `/tmp/nlp_admin_socket` and speaks the protocol in
`textdesk.protocol`. To analyse text without a server, call the functions in
`textdesk.nlp` directly.
# widget.py
# single page countdown widget. Fetches /api/days once, stays on "Loading..." on any failure

WIDGET_HTML = """<!doctype html>
<html>
<head>
  <meta charset="utf-8">
  <title>Countdown</title>
  <style>
    body { margin: 0; background: transparent; }
    #widget {
      position: absolute; top: 0; left: 0; width: 300px; padding: 10px;
      background-color: #0D0D0D; color: #ffffff; border-radius: 10px;
      font-family: 'Orbitron', sans-serif; text-align: center;
      box-shadow: 0 0 20px rgba(255,255,255,0.1); letter-spacing: 2px;
    }
    #title { font-size: 1.2rem; font-weight: bold; }
    #days { font-size: 2rem; }
  </style>
</head>
<body>
  <div id="widget">
    <div id="title"></div>
    <div id="days">Loading...</div>
  </div>
  <script>
    fetch("/api/days")
      .then((res) => (res.ok ? res.json() : Promise.reject(res.status)))
      .then((data) => {
        document.getElementById("title").textContent = data.title;
        document.getElementById("days").textContent =
          data.status === "today" ? "TODAY" : data.days + " DAYS";
      })
      .catch(() => {});
  </script>
</body>
</html>
"""

"""
MiniNote Backend - Editor Page Template
========================================

What:  The single HTML page served for a note in rendered mode.
How:   `string.Template` substitution of three pre-escaped values:
       $slug, $content (textarea body) and $description (meta attribute).
       Callers escape; this module only assembles.

The page loads the front-end assets served by routes/static.py
(styles, clipboard, markdown preview, QR code, history sidebar) and an
inline upload script that posts to /upload and inserts the returned
reference at the cursor.
"""

from string import Template

_PAGE = Template(
    """<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>web-mini-note · $slug</title>
    <link rel="shortcut icon" href="/favicon.ico">
    <link rel="stylesheet" href="/styles.css">
    <meta name="description" content="📔 $description">
    <script src="/js/qrcode.min.js"></script>
    <script src="/js/clipboard.min.js"></script>
    <script src="/js/marked.min.js"></script>
    <script src="/js/mousetrap.min.js"></script>
</head>
<body>
    <div id="sidebar" class="sidebar">
        <script src="/history.js"></script>
        <span class="close-btn" onclick="toggleSidebar()">&times;</span>
        <h3>Recent Notes</h3>
        <ul id="history-list"></ul>
    </div>
    <div class="container">
        <div id="qrcodePopup">
            <div id="qrcode"></div>
        </div>
        <textarea class="mousetrap" id="content" spellcheck="false" autocapitalize="off" autocomplete="off" autocorrect="off">$content</textarea>
        <button id="clippy" class="btn">
            <img src="/clippy.svg" alt="Copy to clipboard" style="width: 12px; height: 16px;">
        </button>
        <div id="markdown-content" style="display: none"></div>
        <div class="link">
            <a href="/">💡 new &nbsp;|&nbsp;</a>
            <a href="#" id="renderMarkdown">note/$slug&nbsp;<label id="renderStatus" style="cursor: pointer">🔓</label></a>
            <a href="#" id="showQRCode" class="copyBtn">&nbsp; | &nbsp;🔗 share</a>
            <a href="#" id="showHistory" class="showHistory">&nbsp; | &nbsp;📜 history</a>
            <a href="#" id="uploadTrigger">&nbsp; | &nbsp;⤴ upload</a>
        </div>
    </div>
    <pre id="printable"></pre>
    <script src="/markdown.js"></script>
    <script src="/copy.js"></script>
    <script src="/script.js"></script>
    <input type="file" id="fileInput" style="display:none" />
    <script>
    (function(){
      var el = document.getElementById('uploadTrigger');
      var input = document.getElementById('fileInput');
      var ta = document.getElementById('content');
      if(!el || !input || !ta) return;
      el.addEventListener('click', function(e){ e.preventDefault(); input.click(); });
      input.addEventListener('change', async function(){
        if(!input.files || input.files.length === 0) return;
        var f = input.files[0];
        if(f.size > 100*1024*1024){ showNotification('file too large (>100MB)'); return; }
        var fd = new FormData();
        fd.append('file', f);
        try{
          showNotification('uploading...');
          var resp = await fetch('/upload', { method: 'POST', body: fd });
          if(!resp.ok){ showNotification('upload failed'); return; }
          var data = await resp.json();
          var cursorPos = ta.selectionStart || 0;
          var before = ta.value.substring(0, cursorPos);
          var after = ta.value.substring(cursorPos);
          var insert = data.is_image
            ? '![](' + data.url + ')'
            : '[' + (data.name || 'attachment') + '](' + data.url + ')';
          ta.value = before + insert + after;
          ta.selectionStart = ta.selectionEnd = cursorPos + insert.length;
          ta.focus();
          showNotification('uploaded');
        }catch(e){
          showNotification('upload error');
        }finally{
          input.value = '';
        }
      });
    })();
    </script>
</body>
</html>
"""
)


def render_page(slug: str, content: str, description: str) -> str:
    """Fill the page template. All arguments must already be HTML-escaped."""
    return _PAGE.substitute(slug=slug, content=content, description=description)
